"""
Per-connection owner identity for MCP sessions.

SSE clients identify their user with an `X-User-Id` header on connect. The id
is bound to the connection's context for as long as the connection is open,
so tool calls served over that connection (and only those) act on the user's
behalf. Nothing is kept once the connection closes.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

_session_owner_id: ContextVar[str | None] = ContextVar("promptform_session_owner_id", default=None)


def get_session_owner_id() -> str | None:
    """Owner id bound to the current connection, if any."""
    return _session_owner_id.get()


@contextmanager
def bind_session_owner(owner_id: str | None) -> Iterator[None]:
    """Bind an owner id to the current connection until the block exits."""
    token = _session_owner_id.set(owner_id or None)
    try:
        yield
    finally:
        _session_owner_id.reset(token)
