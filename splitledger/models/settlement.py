from sqlalchemy import Column, Integer, Numeric, ForeignKey, DateTime, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from splitledger.db.session import Base
from splitledger.schemas.facts import SettlementStatus

class Settlement(Base):
    __tablename__ = "settlements"

    id = Column(Integer, primary_key=True, index=True)
    group_id = Column(Integer, ForeignKey("groups.id"), nullable=False)
    payer_id = Column(Integer, nullable=False)
    payee_id = Column(Integer, nullable=False)
    amount = Column(Numeric(19, 2), nullable=False)
    status = Column(Enum(SettlementStatus), nullable=False, default=SettlementStatus.PENDING)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    marked_paid_at = Column(DateTime(timezone=True), nullable=True)
    settled_at = Column(DateTime(timezone=True), nullable=True)

    group = relationship("Group", back_populates="settlements")
