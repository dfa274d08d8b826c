from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String

from app.db.session import Base


class AttendanceLog(Base):
    __tablename__ = "attendance_logs"

    id = Column(String(36), primary_key=True)
    staff_id = Column(String(36), ForeignKey("employees.id"), nullable=False)
    shift_id = Column(String(36), ForeignKey("shifts.id"), nullable=True)
    location_id = Column(String(36), ForeignKey("locations.id"), nullable=True)
    check_in_at = Column(DateTime(timezone=True), nullable=False, index=True)
    check_out_at = Column(DateTime(timezone=True), nullable=True)
    is_late = Column(Boolean, nullable=False, default=False)
    late_minutes = Column(Integer, nullable=True)
    auto_clocked_out = Column(Boolean, nullable=False, default=False)
    early_departure_reason = Column(String(255), nullable=True)
