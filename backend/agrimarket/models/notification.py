"""
Notifications for buyers and suppliers
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text
from sqlalchemy.sql import func
from agrimarket.core.database import Base


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_type = Column(String(20), nullable=False, index=True)
    title = Column(Text, nullable=False)
    message = Column(Text, nullable=False)
    # 'transaction', 'verification', 'system'
    type = Column(String(20), nullable=False)
    related_id = Column(Text)
    is_read = Column(Boolean, nullable=False, server_default="false", index=True)
    date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
