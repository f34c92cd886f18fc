"""CORS restricted to an allow-list of domain substrings."""
import logging
from typing import Sequence

from starlette.middleware.cors import CORSMiddleware

logger = logging.getLogger("awc_api.cors")


class DomainAllowListCORSMiddleware(CORSMiddleware):
    """Allow any Origin containing one of ``allowed_domains``.

    Requests without an Origin header (curl, server-to-server, mobile apps) are not
    subject to CORS at all and pass straight through.
    """

    def __init__(self, app, allowed_domains: Sequence[str], **kwargs):
        kwargs.setdefault("allow_methods", ["GET", "POST", "PUT", "DELETE"])
        kwargs.setdefault("allow_headers", ["Content-Type", "Authorization"])
        kwargs.setdefault("allow_credentials", True)
        super().__init__(app, allow_origins=[], **kwargs)
        self.allowed_domains = [d.lower() for d in allowed_domains]

    def is_allowed_origin(self, origin: str) -> bool:
        allowed = any(domain in origin.lower() for domain in self.allowed_domains)
        if not allowed:
            logger.warning(f"Blocked origin: {origin}")
        return allowed
