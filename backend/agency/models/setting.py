from sqlalchemy import Column, Integer, String, Text, DateTime, func
from ..database import Base

MESSAGE_TEMPLATE_KEY = "message_template"


class Setting(Base):
    __tablename__ = "settings"

    id = Column(Integer, primary_key=True)
    key = Column(String(255), unique=True, nullable=False)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())
