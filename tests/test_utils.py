"""
Unit tests for the shared utility functions
"""
import re
import pytest
from datetime import datetime, timedelta, timezone, UTC
from unittest.mock import patch

from exceptions import RouteParameterError
from shared.constants import ApiRoutes
from shared.utils import (
    build_route,
    format_date,
    generate_id,
    slugify,
    total_pages,
    truncate_text,
)

SLUG_PATTERN = re.compile(r"^(?:[a-z0-9]+(?:-[a-z0-9]+)*)?$")


class TestFormatDate:
    """Test format_date"""

    def test_utc_datetime(self):
        """Test UTC datetimes are rendered with milliseconds and Z suffix"""
        value = datetime(2024, 1, 15, 10, 30, tzinfo=UTC)
        assert format_date(value) == "2024-01-15T10:30:00.000Z"

    def test_naive_datetime_is_utc(self):
        """Test naive datetimes are treated as UTC"""
        assert format_date(datetime(2024, 1, 15, 10, 30)) == "2024-01-15T10:30:00.000Z"

    def test_offset_converted_to_utc(self):
        """Test datetimes with an offset are converted to UTC"""
        tokyo = timezone(timedelta(hours=9))
        value = datetime(2024, 1, 15, 19, 30, 5, 250000, tzinfo=tokyo)
        assert format_date(value) == "2024-01-15T10:30:05.250Z"

    def test_sub_millisecond_precision_kept(self):
        """Test microseconds are kept when milliseconds would lose them"""
        value = datetime(2024, 1, 15, 10, 30, 0, 123456, tzinfo=UTC)
        assert format_date(value) == "2024-01-15T10:30:00.123456Z"

    @pytest.mark.parametrize(
        "value",
        [
            datetime(2024, 1, 15, 10, 30, tzinfo=UTC),
            datetime(1999, 12, 31, 23, 59, 59, 999000, tzinfo=UTC),
            datetime(2030, 6, 1, 0, 0, 0, 1, tzinfo=UTC),
            datetime(2024, 2, 29, 12, 0, tzinfo=timezone(timedelta(hours=-5))),
        ],
    )
    def test_round_trip(self, value):
        """Test the output parses back to the same instant"""
        assert datetime.fromisoformat(format_date(value)) == value


class TestGenerateId:
    """Test generate_id"""

    def test_non_empty_base36(self):
        """Test ids are non-empty lowercase base-36 strings"""
        value = generate_id()
        assert value
        assert re.fullmatch(r"[0-9a-z]+", value)

    def test_consecutive_ids_differ(self):
        """Test immediate successive calls do not collide"""
        ids = {generate_id() for _ in range(1000)}
        assert len(ids) == 1000

    def test_random_part_followed_by_timestamp(self):
        """Test the id layout: random component then epoch milliseconds"""
        with (
            patch("shared.utils.random.getrandbits", return_value=35),
            patch("shared.utils.time.time", return_value=2.0),
        ):
            assert generate_id() == "z1jk"


class TestSlugify:
    """Test slugify"""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Hello World!", "hello-world"),
            ("  --Foo__Bar  baz-- ", "foo-bar-baz"),
            ("Café au lait", "caf-au-lait"),
            ("Already-a-slug", "already-a-slug"),
            ("Post #42: Launch", "post-42-launch"),
            ("!!!", ""),
            ("", ""),
        ],
    )
    def test_examples(self, text, expected):
        """Test known inputs"""
        assert slugify(text) == expected

    @pytest.mark.parametrize(
        "text",
        [
            "İstanbul Ünïcödé",
            "tabs\tand\nnewlines",
            "___---___",
            "MiXeD CaSe 123",
            "emoji 🚀 rocket",
            "-leading and trailing-",
        ],
    )
    def test_output_alphabet(self, text):
        """Test output holds only lowercase alphanumerics and inner hyphens"""
        assert SLUG_PATTERN.match(slugify(text))


class TestTruncateText:
    """Test truncate_text"""

    def test_short_text_unchanged(self):
        """Test text within the bound is returned as-is"""
        assert truncate_text("hello", 10) == "hello"
        assert truncate_text("hello", 5) == "hello"
        assert truncate_text("", 0) == ""

    def test_long_text_truncated(self):
        """Test long text is cut and ends with an ellipsis"""
        assert truncate_text("hello world", 8) == "hello..."

    @pytest.mark.parametrize("max_length", range(3, 20))
    def test_truncated_length_is_exact(self, max_length):
        """Test truncated output is exactly max_length long"""
        text = "x" * 50
        result = truncate_text(text, max_length)
        assert len(result) == max_length
        assert result.endswith("...")

    def test_bound_of_three_is_only_ellipsis(self):
        """Test the smallest usable bound"""
        assert truncate_text("abcdef", 3) == "..."

    def test_bound_below_ellipsis_raises(self):
        """Test a bound too small to hold the ellipsis is rejected"""
        with pytest.raises(ValueError):
            truncate_text("abcdef", 2)


class TestBuildRoute:
    """Test build_route"""

    def test_fills_parameter(self):
        """Test :id is replaced"""
        assert build_route(ApiRoutes.Posts.LIKE, id="p1") == "/posts/p1/like"
        assert build_route(ApiRoutes.Posts.COMMENT, id=42) == "/posts/42/comments"

    def test_quotes_values(self):
        """Test values cannot escape their path segment"""
        assert build_route(ApiRoutes.Posts.LIKE, id="a b/c") == "/posts/a%20b%2Fc/like"

    def test_route_without_parameters(self):
        """Test templates without placeholders are returned unchanged"""
        assert build_route(ApiRoutes.Auth.LOGIN) == "/auth/login"

    def test_missing_parameter(self):
        """Test a missing parameter raises RouteParameterError"""
        with pytest.raises(RouteParameterError) as exc_info:
            build_route(ApiRoutes.Posts.LIKE)

        assert exc_info.value.parameter == "id"
        assert exc_info.value.status_code == 422
        assert exc_info.value.details["field_errors"] == {"id": "Missing route parameter"}


class TestTotalPages:
    """Test total_pages"""

    @pytest.mark.parametrize(
        "total,limit,expected",
        [(0, 20, 0), (1, 20, 1), (20, 20, 1), (21, 20, 2), (100, 100, 1), (250, 100, 3)],
    )
    def test_page_counts(self, total, limit, expected):
        assert total_pages(total, limit) == expected

    def test_non_positive_limit(self):
        with pytest.raises(ValueError):
            total_pages(10, 0)
