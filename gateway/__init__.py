"""
API gateway: rewrite rules and the reverse proxy that applies them
"""

from .rewrites import RewriteRule, api_rewrite
from .proxy import ApiProxy, get_proxy

__all__ = ["RewriteRule", "api_rewrite", "ApiProxy", "get_proxy"]
