import logging
from typing import Optional

from fastapi import APIRouter, Query, status

from app.api import schemas
from app.api.dependencies import RepositoryDep
from app.api.errors import ApiError
from app.core.db import StoreError
from app.services.distance import is_valid_coordinates, parse_coordinate, rank_by_distance


"""API routes for school registration and proximity listing. - api, routes"""

logger = logging.getLogger(__name__)

router = APIRouter(tags=["schools"])


@router.post(
    "/addSchool",
    response_model=schemas.SchoolCreated,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": schemas.ValidationErrorResponse}, 500: {"model": schemas.ErrorResponse}},
)
async def add_school(req: schemas.SchoolCreate, repository: RepositoryDep):
    """Register a school and return its id. - add_school

    The body has already been trimmed and range-checked by SchoolCreate, so
    invalid input never reaches the store.
    """
    try:
        school_id = await repository.add(req.name, req.address, req.latitude, req.longitude)
    except StoreError as exc:
        logger.exception("Error adding school")
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error adding school", str(exc)) from exc

    logger.info("Added school %s (%s)", school_id, req.name)
    return schemas.SchoolCreated(schoolId=school_id)


@router.get(
    "/listSchools",
    response_model=schemas.SchoolList,
    responses={400: {"model": schemas.ErrorResponse}, 500: {"model": schemas.ErrorResponse}},
)
async def list_schools(
    repository: RepositoryDep,
    latitude: Optional[str] = Query(None, description="Latitude of the user location"),
    longitude: Optional[str] = Query(None, description="Longitude of the user location"),
):
    """List every school ordered by distance from the supplied location. - list_schools"""
    if not _present(latitude) or not _present(longitude):
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Latitude and longitude are required")

    user_lat = parse_coordinate(latitude)
    user_lng = parse_coordinate(longitude)
    if not is_valid_coordinates(user_lat, user_lng):
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Invalid coordinates provided")

    try:
        stored = await repository.list_all()
    except StoreError as exc:
        logger.exception("Error fetching schools")
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error fetching schools", str(exc)) from exc

    schools = [
        schemas.SchoolDistance(
            id=school.id,
            name=school.name,
            address=school.address,
            latitude=round(school.latitude, 6),
            longitude=round(school.longitude, 6),
            distance=round(distance, 2),
            created_at=school.created_at,
        )
        for school, distance in rank_by_distance(stored, user_lat, user_lng)
    ]

    return schemas.SchoolList(
        schools=schools,
        total=len(schools),
        userLocation=schemas.UserLocation(latitude=user_lat, longitude=user_lng),
    )


def _present(value: Optional[str]) -> bool:
    """A query value counts as supplied when it is not blank. - present"""
    return value is not None and bool(value.strip())
