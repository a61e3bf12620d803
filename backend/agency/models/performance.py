from sqlalchemy import Column, Integer, String, Text, DateTime, Enum, ForeignKey, func
from sqlalchemy.orm import relationship
import enum
from ..database import Base


class PerformanceStatus(str, enum.Enum):
    PENDING = "pending"        # richiesta pubblica, in attesa di conferma
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Performance(Base):
    __tablename__ = "performances"

    id = Column(Integer, primary_key=True)
    artist_id = Column(
        Integer,
        ForeignKey("artists.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(String(255), nullable=False)
    # data/ora locale (naive)
    performance_date = Column(DateTime, nullable=False, index=True)
    status = Column(
        Enum(
            PerformanceStatus,
            name="performance_status",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=PerformanceStatus.SCHEDULED,
    )
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    artist = relationship("Artist", back_populates="performances")
