from sqlalchemy import BigInteger, Column, Float, ForeignKey, Integer, String
from motra.db import Base


class WorkoutRoutePoint(Base):
    __tablename__ = "workout_route_points"

    id = Column(String(36), primary_key=True)
    workout_id = Column(String(36), ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False, index=True)

    seq = Column(Integer, nullable=False)  # 0-based position on the route
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    altitude_m = Column(Float, nullable=False)
    timestamp_ms = Column(BigInteger, nullable=False)
    speed_mps = Column(Float, nullable=False)  # raw reading, negative = unknown
