"""
Pydantic models describing the data exchanged with the SocialX API
"""

from .entities import (
    User,
    Post,
    Comment,
)

from .requests import (
    PaginationParams,
    RegisterRequest,
    LoginRequest,
    PostRequest,
    CommentRequest,
    UserProfileUpdateRequest,
)

from .responses import (
    ApiResponse,
    PaginationMeta,
    PaginatedResponse,
    ErrorResponse,
    HealthResponse,
    RouteInfo,
)

__all__ = [
    # Entities
    "User",
    "Post",
    "Comment",
    # Request models
    "PaginationParams",
    "RegisterRequest",
    "LoginRequest",
    "PostRequest",
    "CommentRequest",
    "UserProfileUpdateRequest",
    # Response models
    "ApiResponse",
    "PaginationMeta",
    "PaginatedResponse",
    "ErrorResponse",
    "HealthResponse",
    "RouteInfo",
]
