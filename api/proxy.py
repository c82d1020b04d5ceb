"""
Catch-all route handing /api requests to the reverse proxy
"""

from fastapi import APIRouter, Request

from dependencies import ProxyDep

router = APIRouter(tags=["proxy"])

PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


@router.api_route(
    "/api",
    methods=PROXY_METHODS,
    include_in_schema=False,
)
@router.api_route(
    "/api/{path:path}",
    methods=PROXY_METHODS,
    summary="Forward to the backend API",
    description="Requests under /api are rewritten to the configured backend origin.",
)
async def forward_to_backend(request: Request, proxy: ProxyDep):
    return await proxy.forward(request)
