from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, func
from sqlalchemy.orm import relationship
from ..database import Base


def split_list(raw: str | None) -> list[str]:
    """'Rock,Jazz,' -> ['Rock', 'Jazz']"""
    return [p.strip() for p in (raw or "").split(",") if p.strip()]


def join_list(values) -> str:
    # dedup mantenendo l'ordine di inserimento
    seen: list[str] = []
    for v in values or []:
        v = (v or "").strip()
        if v and v not in seen:
            seen.append(v)
    return ",".join(seen)


class Artist(Base):
    __tablename__ = "artists"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    # NB: generi e giorni preferiti sono salvati come testo separato da virgole,
    # ma fuori dal modello si usano sempre le liste (genres / preferred_days)
    genre = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=True)
    instagram = Column(String(255), nullable=True)
    grade = Column(String(1), nullable=True)  # S / A / B / C
    available_time = Column(String(255), nullable=True)
    preferred_day_list = Column("preferred_days", String(64), nullable=True)
    instruments = Column(String(255), nullable=True)
    member_count = Column(Integer, nullable=False, default=1)
    notes = Column(Text, nullable=True)
    is_favorite = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    performances = relationship(
        "Performance",
        back_populates="artist",
        cascade="all, delete-orphan",
    )

    @property
    def genres(self) -> list[str]:
        return split_list(self.genre)

    @genres.setter
    def genres(self, values) -> None:
        self.genre = join_list(values)

    @property
    def preferred_days(self) -> list[str]:
        return split_list(self.preferred_day_list)

    @preferred_days.setter
    def preferred_days(self, values) -> None:
        self.preferred_day_list = join_list(values) or None
