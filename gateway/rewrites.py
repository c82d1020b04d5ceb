"""
Path rewrite rules for the API proxy.

A rule pairs a source path pattern with a destination template, e.g.
``/api/:path*`` -> ``http://localhost:4000/api/:path*``. Patterns are made of
literal segments and named parameters:

- ``:name``  exactly one path segment
- ``:name*`` zero or more trailing segments
- ``:name+`` one or more trailing segments
"""

import re
from typing import Dict, List, NamedTuple, Optional, Tuple
from urllib.parse import quote, urlsplit

from config import Settings

LITERAL = "literal"
PARAM = "param"
ZERO_OR_MORE = "zero_or_more"
ONE_OR_MORE = "one_or_more"

_PARAM_TOKEN = re.compile(r"^:([A-Za-z_][A-Za-z0-9_]*)([*+]?)$")
_DESTINATION_PARAM = re.compile(r"(/?):([A-Za-z_][A-Za-z0-9_]*)[*+]?")
# existing %XX escapes are kept as they arrived
_SEGMENT_SAFE = "!$&'()*+,;=:@-._~%"


class Segment(NamedTuple):
    kind: str
    value: str


def _split_path(path: str) -> List[str]:
    return [segment for segment in path.split("/") if segment]


def _split_destination(destination: str) -> Tuple[str, str]:
    """Separate ``scheme://netloc`` from the path template that follows it"""
    parts = urlsplit(destination)
    if parts.scheme and parts.netloc:
        origin = f"{parts.scheme}://{parts.netloc}"
        return origin, destination[len(origin):]
    return "", destination


def parse_pattern(pattern: str) -> List[Segment]:
    """Parse a source pattern into segments"""
    if not pattern.startswith("/"):
        raise ValueError(f"Pattern '{pattern}' must start with '/'")

    segments = []
    for raw in _split_path(pattern):
        match = _PARAM_TOKEN.match(raw)
        if not match:
            if raw.startswith(":"):
                raise ValueError(f"Invalid parameter '{raw}' in pattern '{pattern}'")
            segments.append(Segment(LITERAL, raw))
            continue

        name, modifier = match.groups()
        if modifier == "*":
            segments.append(Segment(ZERO_OR_MORE, name))
        elif modifier == "+":
            segments.append(Segment(ONE_OR_MORE, name))
        else:
            segments.append(Segment(PARAM, name))

    for segment in segments[:-1]:
        if segment.kind in (ZERO_OR_MORE, ONE_OR_MORE):
            raise ValueError(
                f"Catch-all parameter ':{segment.value}' must be last in '{pattern}'"
            )
    return segments


class RewriteRule:
    """Forward paths matching ``source`` to ``destination``"""

    def __init__(self, source: str, destination: str):
        self.source = source
        self.destination = destination
        self._segments = parse_pattern(source)
        # userinfo such as user:pass@host is not a parameter
        self._origin, self._template = _split_destination(destination)

        names = {s.value for s in self._segments if s.kind != LITERAL}
        for _, name in _DESTINATION_PARAM.findall(self._template):
            if name not in names:
                raise ValueError(
                    f"Destination parameter ':{name}' is not defined in '{source}'"
                )

    def __repr__(self) -> str:
        return f"RewriteRule({self.source!r} -> {self.destination!r})"

    def match(self, path: str) -> Optional[Dict[str, str]]:
        """Return the captured parameters, or None when ``path`` does not match"""
        parts = _split_path(path)
        params: Dict[str, str] = {}
        position = 0

        for segment in self._segments:
            if segment.kind == LITERAL:
                if position >= len(parts) or parts[position] != segment.value:
                    return None
                position += 1
            elif segment.kind == PARAM:
                if position >= len(parts):
                    return None
                params[segment.value] = parts[position]
                position += 1
            else:
                rest = parts[position:]
                if segment.kind == ONE_OR_MORE and not rest:
                    return None
                params[segment.value] = "/".join(rest)
                position = len(parts)

        if position != len(parts):
            return None
        return params

    def matches(self, path: str) -> bool:
        return self.match(path) is not None

    def apply(self, path: str, query: str = "") -> Optional[str]:
        """
        Rewrite ``path`` into the destination URL.

        Returns None when the path does not match. ``path`` may be the raw,
        still percent-encoded request path: escapes such as ``%2F`` are
        forwarded as they are. The query string is carried over unchanged,
        and a trailing slash on ``path`` is kept.
        """
        params = self.match(path)
        if params is None:
            return None

        def substitute(match: re.Match) -> str:
            leading_slash, name = match.groups()
            value = params[name]
            if not value:
                return ""
            quoted = "/".join(quote(part, safe=_SEGMENT_SAFE) for part in value.split("/"))
            return leading_slash + quoted

        url = self._origin + _DESTINATION_PARAM.sub(substitute, self._template)
        if path.endswith("/") and len(path) > 1 and not url.endswith("/"):
            url += "/"
        if query:
            url += ("&" if "?" in url else "?") + query
        return url


def api_rewrite(settings: Settings) -> RewriteRule:
    """The rule that forwards API calls to the configured backend origin"""
    return RewriteRule(settings.api_proxy_source, settings.proxy_destination)
