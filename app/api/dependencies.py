"""FastAPI dependencies shared by the routes."""

from __future__ import annotations

from typing import Annotated, AsyncIterator

from fastapi import Depends, Request

from app.core.db import Database
from app.services.repository import SchoolRepository, SQLAlchemySchoolRepository


def get_database(request: Request) -> Database:
    """Return the Database handle created with the application."""

    return request.app.state.database


async def get_repository(
    database: Annotated[Database, Depends(get_database)],
) -> AsyncIterator[SchoolRepository]:
    """Yield a repository bound to one session for the duration of a request."""

    async with database.session() as session:
        yield SQLAlchemySchoolRepository(session)


RepositoryDep = Annotated[SchoolRepository, Depends(get_repository)]


__all__ = ["get_database", "get_repository", "RepositoryDep"]
