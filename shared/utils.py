"""
Pure helper functions shared across the SocialX codebase
"""

import math
import random
import re
import string
import time
from datetime import datetime, UTC
from urllib.parse import quote

from exceptions import RouteParameterError

ELLIPSIS = "..."

_BASE36_ALPHABET = string.digits + string.ascii_lowercase
_NON_SLUG_CHARS = re.compile(r"[^\w\s-]", re.ASCII)
_SLUG_SEPARATORS = re.compile(r"[\s_-]+", re.ASCII)
_ROUTE_PARAM = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")


def format_date(value: datetime) -> str:
    """
    Format a datetime as an ISO-8601 UTC timestamp ending in ``Z``.

    Naive datetimes are taken to be UTC. Millisecond precision is used
    unless the value has sub-millisecond microseconds, so parsing the
    result with ``datetime.fromisoformat`` yields the same instant.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    value = value.astimezone(UTC)
    timespec = "milliseconds" if value.microsecond % 1000 == 0 else "microseconds"
    return value.isoformat(timespec=timespec).replace("+00:00", "Z")


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def generate_id() -> str:
    """
    Generate a short random identifier.

    A random base-36 component followed by the current epoch milliseconds
    in base 36. Collisions are unlikely but not cryptographically ruled out.
    """
    random_part = _to_base36(random.getrandbits(52))
    time_part = _to_base36(int(time.time() * 1000))
    return random_part + time_part


def slugify(text: str) -> str:
    """Lower-case ``text`` and reduce it to ASCII letters, digits and single hyphens"""
    slug = _NON_SLUG_CHARS.sub("", text.lower())
    slug = _SLUG_SEPARATORS.sub("-", slug)
    return slug.strip("-")


def truncate_text(text: str, max_length: int) -> str:
    """Cut ``text`` to exactly ``max_length`` characters, ending in an ellipsis"""
    if len(text) <= max_length:
        return text
    if max_length < len(ELLIPSIS):
        raise ValueError(
            f"max_length must be at least {len(ELLIPSIS)} to truncate text"
        )
    return text[: max_length - len(ELLIPSIS)] + ELLIPSIS


def build_route(template: str, **params) -> str:
    """
    Fill the ``:name`` placeholders of a route template.

    >>> build_route("/posts/:id/like", id="abc")
    '/posts/abc/like'

    Values are URL-quoted so they always stay within one path segment.
    """

    def substitute(match: re.Match) -> str:
        name = match.group(1)
        if name not in params or params[name] is None:
            raise RouteParameterError(template, name)
        return quote(str(params[name]), safe="")

    return _ROUTE_PARAM.sub(substitute, template)


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed to show ``total`` items, ``limit`` per page"""
    if limit <= 0:
        raise ValueError("limit must be positive")
    if total <= 0:
        return 0
    return math.ceil(total / limit)
