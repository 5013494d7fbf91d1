from sqlalchemy import Column, Integer, String, Text, ForeignKey, Date, DateTime, Numeric, Boolean, false
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from splitledger.db.session import Base

class Expense(Base):
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, index=True)
    group_id = Column(Integer, ForeignKey("groups.id"), nullable=False)
    paid_by = Column(Integer, nullable=False)
    amount = Column(Numeric(19, 2), nullable=False)
    currency = Column(String(3), nullable=False, server_default="EUR")
    category_id = Column(Integer, nullable=True)
    description = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    expense_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    is_deleted = Column(Boolean, nullable=False, default=False, server_default=false())

    group = relationship("Group", back_populates="expenses")
    splits = relationship("ExpenseSplit", back_populates="expense", cascade="all, delete")
