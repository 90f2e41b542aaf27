from sqlalchemy import Column, String, Integer, Enum
from sqlalchemy.orm import relationship
from tenbucks.database import Base
from tenbucks.models.enums import PlayerStatus
import uuid

class Player(Base):
    __tablename__ = "players"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False, unique=True)
    status = Column(Enum(PlayerStatus), nullable=False, default=PlayerStatus.NOT_IN_SESSION)
    # set iff status == ON_WAITLIST; 1-based and gap-free across the waitlist
    waitlist_position = Column(Integer, nullable=True)

    participations = relationship("SessionParticipant", back_populates="player")

    def __repr__(self):
        return f"<Player {self.name!r} {self.status.value} pos={self.waitlist_position}>"
