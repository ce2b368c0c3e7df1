"""Slug helpers shared by sessions and taxonomy."""

import re
import threading
import time

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_last_token = 0
_token_lock = threading.Lock()


def slugify(text: str) -> str:
    """Lower-case, collapse non-alphanumeric runs to one hyphen, trim hyphens."""
    return _NON_ALNUM.sub("-", text.lower()).strip("-")


def unique_token() -> str:
    """Millisecond timestamp, bumped so repeated calls in one process never collide."""
    global _last_token
    with _token_lock:
        token = max(int(time.time() * 1000), _last_token + 1)
        _last_token = token
    return str(token)


def unique_slug(text: str, fallback: str = "session") -> str:
    return f"{slugify(text) or fallback}-{unique_token()}"
