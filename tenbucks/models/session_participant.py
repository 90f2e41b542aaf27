from sqlalchemy import Column, String, Integer, Enum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from tenbucks.database import Base
from tenbucks.models.enums import Team

class SessionParticipant(Base):
    """A player active in a session, with an optional team (None = unassigned)."""

    __tablename__ = "session_participants"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(String, ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False)
    player_id = Column(String, ForeignKey("players.id", ondelete="CASCADE"), nullable=False)
    team = Column(Enum(Team), nullable=True)

    session = relationship("ClubSession", back_populates="participants")
    player = relationship("Player", back_populates="participations")

    __table_args__ = (
        UniqueConstraint("session_id", "player_id", name="uq_session_participants_session_player"),
    )
