"""
Escrow transactions
"""
from sqlalchemy import Column, String, Boolean, DateTime, Text, DECIMAL, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from agrimarket.core.database import Base


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Text, primary_key=True)
    product_id = Column(Text, ForeignKey("products.id"), nullable=False, index=True)

    # Product data at purchase time
    product_name = Column(Text, nullable=False)
    quantity = Column(DECIMAL(10, 2), nullable=False)
    unit = Column(Text, nullable=False)
    amount = Column(DECIMAL(10, 2), nullable=False)

    buyer_wallet = Column(Text, nullable=False, index=True)
    seller_wallet = Column(Text, nullable=False, index=True)
    escrow_account = Column(Text)
    escrow_signature = Column(Text)

    date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    # 'In Escrow', 'Verified'
    status = Column(String(20), nullable=False, server_default="In Escrow", index=True)
    verified = Column(Boolean, nullable=False, server_default="false")

    product = relationship("Product", back_populates="transactions")
