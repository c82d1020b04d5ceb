"""
Application constants shared by the gateway, the backend and API clients
"""

from typing import List


class ApiRoutes:
    """Backend route templates. ``:id`` marks a path parameter."""

    class Auth:
        LOGIN = "/auth/login"
        REGISTER = "/auth/register"
        LOGOUT = "/auth/logout"
        REFRESH = "/auth/refresh"

    class Users:
        PROFILE = "/users/profile"
        SEARCH = "/users/search"

    class Posts:
        FEED = "/posts"
        CREATE = "/posts"
        LIKE = "/posts/:id/like"
        COMMENT = "/posts/:id/comments"


class Pagination:
    DEFAULT_PAGE = 1
    DEFAULT_LIMIT = 20
    MAX_LIMIT = 100


class Validation:
    USERNAME_MIN_LENGTH = 3
    USERNAME_MAX_LENGTH = 30
    PASSWORD_MIN_LENGTH = 8
    POST_MAX_LENGTH = 2000
    COMMENT_MAX_LENGTH = 500


API_ROUTES = ApiRoutes
PAGINATION = Pagination
VALIDATION = Validation


def _constants(group: type) -> dict:
    return {
        name: value
        for name, value in vars(group).items()
        if name.isupper() and not name.startswith("_")
    }


def route_table() -> dict:
    """Route templates grouped by area, e.g. {"AUTH": {"LOGIN": "/auth/login"}}"""
    return {
        "AUTH": _constants(ApiRoutes.Auth),
        "USERS": _constants(ApiRoutes.Users),
        "POSTS": _constants(ApiRoutes.Posts),
    }


def all_routes() -> List[str]:
    """Every distinct route template, in declaration order"""
    routes: List[str] = []
    for group in route_table().values():
        for path in group.values():
            if path not in routes:
                routes.append(path)
    return routes


def pagination_limits() -> dict:
    return _constants(Pagination)


def validation_limits() -> dict:
    return _constants(Validation)
