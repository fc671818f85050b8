from sqlalchemy import Column, DateTime, Float, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from motra.db import Base


class Workout(Base):
    __tablename__ = "workouts"

    id = Column(String(36), primary_key=True)  # uuid4 assigned at finalize

    # running, cycling, walking, hiking
    exercise_type = Column(String(20), nullable=False, index=True)

    start_time = Column(DateTime(timezone=True), nullable=False, index=True)
    end_time = Column(DateTime(timezone=True), nullable=False)

    # Active time in seconds (paused intervals excluded unless configured)
    duration_seconds = Column(Float, nullable=False)
    distance_m = Column(Float, nullable=False)
    calories_kcal = Column(Float, nullable=False)
    pace_s_per_km = Column(Float, nullable=False)  # 0 = undefined

    notes = Column(String, nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    route_points = relationship(
        "WorkoutRoutePoint",
        order_by="WorkoutRoutePoint.seq",
        cascade="all, delete-orphan",
    )
