from sqlalchemy import Column, String, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from tenbucks.database import Base
import uuid

class ClubSession(Base):
    """One club night. Numbered within its season."""

    __tablename__ = "sessions"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    season_id = Column(Integer, ForeignKey("seasons.id", ondelete="CASCADE"), nullable=False)
    number = Column(Integer, nullable=False)

    season = relationship("Season", back_populates="sessions")
    participants = relationship(
        "SessionParticipant", back_populates="session", cascade="all, delete-orphan"
    )
    matches = relationship(
        "DoublesMatch", back_populates="session", cascade="all, delete-orphan"
    )

    __table_args__ = (
        UniqueConstraint("season_id", "number", name="uq_sessions_season_number"),
    )
