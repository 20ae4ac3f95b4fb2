"""SQLAlchemy ORM models for IntervalFit."""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class Workout(Base):
    """One logged workout, entered by hand or recorded by the timer."""

    __tablename__ = "workouts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    exercise_type = Column(String(40), nullable=False)    # interval | cardio | strength | ...
    exercise_name = Column(String(120), nullable=False)
    duration = Column(Integer, nullable=False)            # minutes
    intensity = Column(Integer, nullable=False, default=5)  # 1-10
    notes = Column(Text, nullable=True)
    date = Column(DateTime, nullable=False, default=datetime.now)

    def __repr__(self) -> str:
        return (
            f"<Workout id={self.id} type={self.exercise_type} "
            f"duration={self.duration}m intensity={self.intensity}>"
        )
