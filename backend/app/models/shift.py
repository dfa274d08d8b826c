from sqlalchemy import Column, Date, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.db.session import Base


class Shift(Base):
    __tablename__ = "shifts"

    id = Column(String(36), primary_key=True)
    location_id = Column(String(36), ForeignKey("locations.id"), nullable=False)
    shift_date = Column(Date, nullable=False, index=True)
    start_time = Column(String(8), nullable=False)  # HH:MM local
    end_time = Column(String(8), nullable=False)
    role = Column(String(200), nullable=False, default="")

    location = relationship("Location")
    assignments = relationship("ShiftAssignment", back_populates="shift", order_by="ShiftAssignment.id")


class ShiftAssignment(Base):
    __tablename__ = "shift_assignments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    shift_id = Column(String(36), ForeignKey("shifts.id"), nullable=False)
    staff_id = Column(String(36), ForeignKey("employees.id"), nullable=False)
    approval_status = Column(String(20), nullable=False, default="pending")

    shift = relationship("Shift", back_populates="assignments")
    employee = relationship("Employee")
