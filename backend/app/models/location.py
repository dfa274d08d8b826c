from sqlalchemy import Boolean, Column, String

from app.db.session import Base


class Location(Base):
    __tablename__ = "locations"

    id = Column(String(36), primary_key=True)
    name = Column(String(200), nullable=False)
    requires_checkin = Column(Boolean, nullable=False, default=False)
