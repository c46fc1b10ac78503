from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from app.services.distance import LATITUDE_RANGE, LONGITUDE_RANGE, parse_coordinate


"""Pydantic schemas for request/response models. - schemas"""


# Message reported for each field of SchoolCreate when it fails validation
FIELD_MESSAGES: Dict[str, str] = {
    "name": "School name is required",
    "address": "Address is required",
    "latitude": "Invalid latitude",
    "longitude": "Invalid longitude",
}


def _check_range(value: Any, bounds: tuple) -> float:
    """Parse a coordinate and check it against inclusive bounds. - check_range"""
    parsed = parse_coordinate(value)
    if parsed is None or not bounds[0] <= parsed <= bounds[1]:
        raise ValueError(f"must be a number between {bounds[0]:g} and {bounds[1]:g}")
    return parsed


class SchoolCreate(BaseModel):
    """Request body for registering a school. - school_create

    name/address are trimmed before the emptiness check; coordinates accept
    numbers or numeric strings.
    """
    name: str = Field(..., max_length=255)
    address: str = Field(..., max_length=255)
    latitude: float
    longitude: float

    @field_validator("name", "address", mode="before")
    @classmethod
    def _strip_and_require(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("must be a non-empty string")
        return value.strip()

    @field_validator("latitude", mode="before")
    @classmethod
    def _check_latitude(cls, value: Any) -> float:
        return _check_range(value, LATITUDE_RANGE)

    @field_validator("longitude", mode="before")
    @classmethod
    def _check_longitude(cls, value: Any) -> float:
        return _check_range(value, LONGITUDE_RANGE)


class SchoolCreated(BaseModel):
    """Response for a successful registration. - school_created"""
    success: bool = True
    message: str = "School added successfully"
    schoolId: int


class FieldError(BaseModel):
    """One failing field of a request. - field_error"""
    field: str
    message: str
    location: str = "body"


class ValidationErrorResponse(BaseModel):
    """400 envelope for body validation failures. - validation_error_response"""
    success: bool = False
    errors: List[FieldError]


class ErrorResponse(BaseModel):
    """Envelope for 400/500 failures carrying a single message. - error_response"""
    success: bool = False
    message: str
    error: Optional[str] = None


class SchoolDistance(BaseModel):
    """Single school in a listing, with its distance from the query point. - school_distance"""
    id: int
    name: str
    address: str
    latitude: float
    longitude: float
    # kilometers
    distance: float
    created_at: datetime


class UserLocation(BaseModel):
    """Echo of the query point. - user_location"""
    latitude: float
    longitude: float


class SchoolList(BaseModel):
    """Response for the proximity listing. - school_list"""
    success: bool = True
    schools: List[SchoolDistance]
    total: int
    userLocation: UserLocation
    distanceUnit: str = "kilometers"
