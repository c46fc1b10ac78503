"""ORM entities. - models"""

from .school import School  # noqa: F401

__all__ = ["School"]
