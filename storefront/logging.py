"""
Logging for the storefront.

Configured once on import; modules only ask for a named logger:

    from storefront.logging import get_logger
    logger = get_logger(__name__)

Values that come from visitors (tokens, ids, emails) go through the
helpers below before they reach a log line.
"""

import logging
import os
import sys
from functools import cache

# Vercel prefixes its own timestamp to every stdout line
_FORMATS = {
    "local": "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    "vercel": "%(levelname)s %(name)s: %(message)s",
}

# Supabase talks to PostgREST and GoTrue through httpx
_QUIET_LOGGERS = ("httpx", "httpcore", "hpack")


def configure_logging() -> None:
    """Attach a stdout handler to the root logger unless one is already there."""
    root = logging.getLogger()
    if root.handlers:
        return

    level = logging.getLevelName(os.environ.get("LOG_LEVEL", "INFO").upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMATS["vercel" if os.environ.get("VERCEL") == "1" else "local"]))
    root.addHandler(handler)
    root.setLevel(level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


configure_logging()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _strip_control(value: str) -> str:
    # Newlines and tabs would let a visitor forge extra log entries (CWE-117)
    return "".join(ch if ch.isprintable() else "?" for ch in value)


def sanitize_id_for_logging(id_value: str | None) -> str:
    """
    Shorten an id or session token to its first 8 characters.

    Session tokens are bearer credentials, so the full value never reaches
    the logs.
    """
    if not id_value:
        return "N/A"
    return _strip_control(str(id_value))[:8]


def mask_email_for_logging(email: str | None) -> str:
    """
    Keep the first character of the local part and the domain.

    ``budi.santoso@example.com`` -> ``b***@example.com``
    """
    if not email:
        return "N/A"
    local, sep, domain = _strip_control(str(email)).partition("@")
    if not sep:
        return f"{local[:1]}***"
    return f"{local[:1]}***@{domain[:64]}"


__all__ = [
    "configure_logging",
    "get_logger",
    "mask_email_for_logging",
    "sanitize_id_for_logging",
]
