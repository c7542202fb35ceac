# app/storage/models.py
from sqlalchemy import Column, String, Text
from app.core.database import Base

class KeyValueEntry(Base):
    __tablename__ = "kv_store"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
