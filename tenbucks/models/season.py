from sqlalchemy import Column, Integer, Boolean
from sqlalchemy.orm import relationship
from tenbucks.database import Base

class Season(Base):
    __tablename__ = "seasons"

    id = Column(Integer, primary_key=True, autoincrement=True)
    number = Column(Integer, nullable=False, unique=True)
    is_completed = Column(Boolean, nullable=False, default=False)

    sessions = relationship(
        "ClubSession",
        back_populates="season",
        order_by="ClubSession.number",
        cascade="all, delete-orphan",
    )
