from sqlalchemy import Column, Integer, String, Text, DateTime, Enum, func
import enum
from ..database import Base


class Role(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    # identificativo esterno opaco (open-id)
    open_id = Column(String(64), unique=True, nullable=False)
    name = Column(Text, nullable=True)
    email = Column(String(320), nullable=True)
    login_method = Column(String(64), nullable=True)

    role = Column(
        Enum(Role, name="role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=Role.USER,
    )

    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())
    last_signed_in = Column(DateTime, nullable=False, server_default=func.now())
