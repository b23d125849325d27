"""
Product listing table
"""
from sqlalchemy import Column, String, DateTime, Text, DECIMAL
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from agrimarket.core.database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=False)
    description = Column(Text)

    price = Column(DECIMAL(10, 2), nullable=False)
    quantity = Column(DECIMAL(10, 2), nullable=False)
    unit = Column(Text, nullable=False, server_default="kg")

    batch_id = Column(Text, nullable=False)
    supplier = Column(Text, nullable=False)
    location = Column(Text)

    date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    # 'Listed', 'In Escrow', 'Sold Out'
    status = Column(String(20), nullable=False, server_default="Listed", index=True)

    transactions = relationship("Transaction", back_populates="product")
