"""API package: routes, request/response schemas, dependencies and error handlers.

Submodules are imported explicitly by app.main to avoid import cycles.
- api package
"""

__all__ = []
