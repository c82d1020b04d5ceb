"""
Unit tests for shared constants
"""
from shared.constants import (
    API_ROUTES,
    PAGINATION,
    VALIDATION,
    all_routes,
    pagination_limits,
    route_table,
    validation_limits,
)


class TestApiRoutes:
    """Test the route table"""

    def test_auth_routes(self):
        assert API_ROUTES.Auth.LOGIN == "/auth/login"
        assert API_ROUTES.Auth.REGISTER == "/auth/register"
        assert API_ROUTES.Auth.LOGOUT == "/auth/logout"
        assert API_ROUTES.Auth.REFRESH == "/auth/refresh"

    def test_user_routes(self):
        assert API_ROUTES.Users.PROFILE == "/users/profile"
        assert API_ROUTES.Users.SEARCH == "/users/search"

    def test_post_routes(self):
        assert API_ROUTES.Posts.FEED == "/posts"
        assert API_ROUTES.Posts.CREATE == "/posts"
        assert API_ROUTES.Posts.LIKE == "/posts/:id/like"
        assert API_ROUTES.Posts.COMMENT == "/posts/:id/comments"

    def test_route_table_groups(self):
        """Test route_table exposes every group and name"""
        table = route_table()
        assert set(table) == {"AUTH", "USERS", "POSTS"}
        assert table["POSTS"] == {
            "FEED": "/posts",
            "CREATE": "/posts",
            "LIKE": "/posts/:id/like",
            "COMMENT": "/posts/:id/comments",
        }

    def test_all_routes_distinct(self):
        """Test shared paths are listed once"""
        routes = all_routes()
        assert len(routes) == len(set(routes))
        assert routes.count("/posts") == 1
        assert len(routes) == 9


class TestLimits:
    """Test pagination and validation constants"""

    def test_pagination(self):
        assert PAGINATION.DEFAULT_PAGE == 1
        assert PAGINATION.DEFAULT_LIMIT == 20
        assert PAGINATION.MAX_LIMIT == 100
        assert pagination_limits() == {
            "DEFAULT_PAGE": 1,
            "DEFAULT_LIMIT": 20,
            "MAX_LIMIT": 100,
        }

    def test_validation(self):
        assert validation_limits() == {
            "USERNAME_MIN_LENGTH": 3,
            "USERNAME_MAX_LENGTH": 30,
            "PASSWORD_MIN_LENGTH": 8,
            "POST_MAX_LENGTH": 2000,
            "COMMENT_MAX_LENGTH": 500,
        }
        assert VALIDATION.USERNAME_MIN_LENGTH < VALIDATION.USERNAME_MAX_LENGTH
