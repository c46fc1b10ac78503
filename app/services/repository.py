from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import StoreError
from app.models.school import School


"""School persistence: repository contract and its SQLAlchemy implementation. - repository"""


@dataclass(frozen=True)
class SchoolRecord:
    """A stored school as read back from the store. - school_record"""
    id: int
    name: str
    address: str
    latitude: float
    longitude: float
    created_at: datetime


class SchoolRepository(ABC):
    """Persistence contract for schools. - school_repository"""

    @abstractmethod
    async def add(self, name: str, address: str, latitude: float, longitude: float) -> int:
        """Insert a school and return its store-assigned id."""

    @abstractmethod
    async def list_all(self) -> List[SchoolRecord]:
        """Return every stored school."""


class SQLAlchemySchoolRepository(SchoolRepository):
    """SQLAlchemy implementation of the school repository. - sqlalchemy_school_repository

    Any SQLAlchemy or driver failure is re-raised as StoreError.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add(self, name: str, address: str, latitude: float, longitude: float) -> int:
        school = School(name=name, address=address, latitude=latitude, longitude=longitude)
        self.session.add(school)
        try:
            await self.session.commit()
        except (SQLAlchemyError, OSError) as exc:
            await self.session.rollback()
            raise StoreError("Could not insert school", exc) from exc
        return school.id

    async def list_all(self) -> List[SchoolRecord]:
        try:
            result = await self.session.execute(select(School))
        except (SQLAlchemyError, OSError) as exc:
            raise StoreError("Could not load schools", exc) from exc

        return [
            SchoolRecord(
                id=row.id,
                name=row.name,
                address=row.address,
                latitude=row.latitude,
                longitude=row.longitude,
                created_at=row.created_at,
            )
            for row in result.scalars().all()
        ]
