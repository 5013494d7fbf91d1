from sqlalchemy import Column, Integer, Numeric, ForeignKey, Enum
from sqlalchemy.orm import relationship
from splitledger.db.session import Base
from splitledger.schemas.expense import SplitType

class ExpenseSplit(Base):
    __tablename__ = "expense_splits"

    id = Column(Integer, primary_key=True, index=True)
    expense_id = Column(Integer, ForeignKey("expenses.id"), nullable=False)
    user_id = Column(Integer, nullable=False)
    split_type = Column(Enum(SplitType), nullable=False)
    split_value = Column(Numeric(19, 2), nullable=True)
    share_amount = Column(Numeric(19, 2), nullable=False)

    expense = relationship("Expense", back_populates="splits")
