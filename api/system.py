"""
Gateway system endpoints: health and the shared route/limit tables
"""

import logging
from fastapi import APIRouter

from dependencies import PaginationDep, ProxyDep, SettingsDep
from models.responses import ApiResponse, HealthResponse, PaginatedResponse, RouteInfo
from shared.constants import pagination_limits, route_table, validation_limits

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


@router.get(
    "/health",
    response_model=ApiResponse[HealthResponse],
    summary="Gateway health check",
    description="""
    Reports whether the gateway is serving and where /api requests are forwarded.
    The backend itself is not contacted.
    """,
)
async def health(settings: SettingsDep, proxy: ProxyDep):
    status = "healthy" if proxy.is_started else "starting"
    return ApiResponse[HealthResponse].ok(
        HealthResponse(
            status=status,
            version=settings.app_version,
            environment=settings.environment.value,
            upstream=settings.api_url,
        )
    )


@router.get(
    "/routes",
    response_model=PaginatedResponse[RouteInfo],
    summary="List backend route templates",
    description="""
    Pages through the backend route templates shared with API clients.
    Templates containing `:id` take a path parameter.
    """,
)
async def list_routes(pagination: PaginationDep):
    routes = [
        RouteInfo(group=group, name=name, path=path)
        for group, entries in route_table().items()
        for name, path in entries.items()
    ]
    page = routes[pagination.offset : pagination.offset + pagination.limit]
    logger.debug(
        f"Listing routes page={pagination.page} limit={pagination.limit} "
        f"({len(page)} of {len(routes)})"
    )
    return PaginatedResponse[RouteInfo].from_items(page, pagination, total=len(routes))


@router.get(
    "/limits",
    response_model=ApiResponse[dict],
    summary="Pagination and validation limits",
)
async def limits():
    return ApiResponse[dict].ok(
        {"pagination": pagination_limits(), "validation": validation_limits()}
    )
