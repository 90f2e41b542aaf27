from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from tenbucks.database import Base
from datetime import datetime
import uuid

class DoublesMatch(Base):
    __tablename__ = "doubles_matches"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    session_id = Column(String, ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False)

    # matches in the same wave are played at the same time
    wave_number = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    player1_id = Column(String, ForeignKey("players.id"), nullable=False)
    player2_id = Column(String, ForeignKey("players.id"), nullable=False)
    player3_id = Column(String, ForeignKey("players.id"), nullable=False)
    player4_id = Column(String, ForeignKey("players.id"), nullable=False)

    red_first_set = Column(Integer, nullable=False, default=0)
    black_first_set = Column(Integer, nullable=False, default=0)
    red_second_set = Column(Integer, nullable=False, default=0)
    black_second_set = Column(Integer, nullable=False, default=0)

    is_complete = Column(Boolean, nullable=False, default=False)

    session = relationship("ClubSession", back_populates="matches")
    player1 = relationship("Player", foreign_keys=[player1_id])
    player2 = relationship("Player", foreign_keys=[player2_id])
    player3 = relationship("Player", foreign_keys=[player3_id])
    player4 = relationship("Player", foreign_keys=[player4_id])

    @property
    def player_ids(self):
        return [self.player1_id, self.player2_id, self.player3_id, self.player4_id]

    @property
    def red_total(self) -> int:
        return self.red_first_set + self.red_second_set

    @property
    def black_total(self) -> int:
        return self.black_first_set + self.black_second_set
