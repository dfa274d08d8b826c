from sqlalchemy import Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from app.db.session import Base


class Employee(Base):
    __tablename__ = "employees"

    id = Column(String(36), primary_key=True)
    full_name = Column(String(200), nullable=False)
    role = Column(String(200), nullable=False, default="")
    status = Column(String(20), nullable=False, default="active")  # active|on_leave|terminated
    location_id = Column(String(36), ForeignKey("locations.id"), nullable=True)  # home location

    hourly_rate = Column(Numeric(10, 2), nullable=False, default=0)
    overtime_rate = Column(Numeric(10, 2), nullable=True)
    expected_weekly_hours = Column(Numeric(6, 2), nullable=True)
    expected_shifts_per_week = Column(Integer, nullable=True)

    location = relationship("Location")
