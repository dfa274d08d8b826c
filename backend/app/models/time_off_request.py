from sqlalchemy import Column, Date, ForeignKey, String

from app.db.session import Base


class TimeOffRequest(Base):
    __tablename__ = "time_off_requests"

    id = Column(String(36), primary_key=True)
    employee_id = Column(String(36), ForeignKey("employees.id"), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    request_type = Column(String(30), nullable=False)  # vacation|annual_leave|medical|sick_leave|...
    status = Column(String(20), nullable=False, default="pending")
