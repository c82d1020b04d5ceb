"""
Shared constants and helpers used by the gateway, the backend and API clients
"""

from .constants import (
    API_ROUTES,
    PAGINATION,
    VALIDATION,
    ApiRoutes,
    Pagination,
    Validation,
    all_routes,
    route_table,
)
from .utils import (
    build_route,
    format_date,
    generate_id,
    slugify,
    total_pages,
    truncate_text,
)

__all__ = [
    # Constants
    "API_ROUTES",
    "PAGINATION",
    "VALIDATION",
    "ApiRoutes",
    "Pagination",
    "Validation",
    "all_routes",
    "route_table",
    # Utilities
    "build_route",
    "format_date",
    "generate_id",
    "slugify",
    "total_pages",
    "truncate_text",
]
