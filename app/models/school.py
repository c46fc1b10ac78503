"""SQLAlchemy entity for the schools table."""

from __future__ import annotations

from sqlalchemy import Column, DateTime, Float, Integer, String, func

from app.core.db import Base


class School(Base):
    __tablename__ = "schools"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    address = Column(String(255), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


__all__ = ["School"]
