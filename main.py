from contextlib import asynccontextmanager
from typing import Optional
from uuid import uuid4
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from config import Settings, get_settings
from logging_config import get_logger, get_logger_with_context, log_api_request, log_api_response
from api.proxy import router as proxy_router
from api.system import router as system_router
from pages.home import router as pages_router
from error_handlers import general_exception_handler, register_exception_handlers
from gateway import ApiProxy, api_rewrite

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    proxy: ApiProxy = app.state.proxy
    await proxy.start()
    try:
        yield
    finally:
        await proxy.close()


def create_application(
    settings: Optional[Settings] = None, proxy: Optional[ApiProxy] = None
) -> FastAPI:
    """
    Build the gateway application.

    ``proxy`` defaults to one forwarding /api requests to ``settings.api_url``.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="""
    ## SocialX gateway

    Serves the SocialX landing page and forwards every request under `/api`
    to the backend configured by `NEXT_PUBLIC_API_URL`.

    ### Endpoints
    - **/**: landing page
    - **/health**: gateway status
    - **/routes**, **/limits**: route templates and limits shared with clients
    - **/api/...**: reverse proxy to the backend

    ### Error codes
    - **404**: no route or rewrite rule matches
    - **422**: request validation failed
    - **502**: backend unreachable
    - **504**: backend timed out
    """,
        version=settings.app_version,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        lifespan=lifespan,
        license_info={
            "name": "MIT License",
            "url": "https://opensource.org/licenses/MIT",
        },
        openapi_tags=[
            {"name": "pages", "description": "Server-rendered pages"},
            {"name": "system", "description": "Health and shared configuration endpoints"},
            {"name": "proxy", "description": "Requests forwarded to the backend API"},
        ],
    )

    app.state.settings = settings
    app.state.proxy = proxy or ApiProxy(
        [api_rewrite(settings)],
        timeout=settings.proxy_timeout,
        max_connections=settings.proxy_max_connections,
    )

    # Response compression middleware
    app.add_middleware(GZipMiddleware, minimum_size=settings.response_compression_threshold)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # Request logging and timing middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        request_id = request.headers.get("x-request-id") or uuid4().hex
        request_logger = get_logger_with_context(__name__, request_id=request_id)

        log_api_request(request_logger, request.method, request.url.path, request_id)

        try:
            response = await call_next(request)
        except Exception as exc:
            # unhandled errors get the 500 envelope here, then the headers below
            response = await general_exception_handler(request, exc)

        process_time = time.time() - start_time
        log_api_response(
            request_logger,
            request.method,
            request.url.path,
            response.status_code,
            process_time,
            request_id,
        )

        response.headers["X-Response-Time"] = f"{process_time:.4f}s"
        response.headers["X-Request-ID"] = request_id
        return response

    register_exception_handlers(app)

    app.include_router(pages_router)
    app.include_router(system_router)
    app.include_router(proxy_router)

    return app


app = create_application()
