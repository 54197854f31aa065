"""
Slug allocation for public form links.

A slug is derived from the form name and made unique by probing an injected
existence check: `base`, then `base-1`, `base-2`, ... The probe is not
atomic, so callers allocating and inserting the same base slug concurrently
hold `SlugLocks.hold(base)` and rely on the store's unique constraint as
the final guard.
"""

import asyncio
import inspect
import re
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

DEFAULT_MAX_LENGTH = 50
FALLBACK_SLUG = "form"

_WHITESPACE = re.compile(r"\s+")
_UNSAFE = re.compile(r"[^a-z0-9\-_]")
_HYPHENS = re.compile(r"-{2,}")

ExistsFn = Callable[[str], bool | Awaitable[bool]]


def slugify(form_name: str, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """
    Normalize a form name into a base slug.

    Lower-cases, turns whitespace runs into a single hyphen, drops characters
    that are not URL-safe, squeezes the hyphens that leaves behind and
    truncates to `max_length`.

    Example:
        >>> slugify("Customer  Feedback Survey")
        'customer-feedback-survey'
    """
    slug = _WHITESPACE.sub("-", form_name.strip().lower())
    slug = _HYPHENS.sub("-", _UNSAFE.sub("", slug)).strip("-")[:max_length].rstrip("-")
    return slug or FALLBACK_SLUG


async def _exists(exists_fn: ExistsFn, candidate: str) -> bool:
    result = exists_fn(candidate)
    if inspect.isawaitable(result):
        result = await result
    return bool(result)


async def allocate_slug(
    form_name: str,
    exists_fn: ExistsFn,
    max_length: int = DEFAULT_MAX_LENGTH,
) -> str:
    """
    Allocate the first unused slug for a form name.

    Args:
        form_name: Name the slug is derived from.
        exists_fn: Sync or async predicate telling whether a slug is taken.
        max_length: Maximum length of the base slug.

    Returns:
        The base slug if free, otherwise `base-N` for the smallest free N >= 1.
    """
    base = slugify(form_name, max_length)
    candidate = base
    counter = 1
    while await _exists(exists_fn, candidate):
        candidate = f"{base}-{counter}"
        counter += 1
    return candidate


class SlugLocks:
    """
    One asyncio.Lock per base slug, held through `hold()`.

    A lock lives only while some task holds or waits for it, so the registry
    stays bounded by the number of in-flight allocations.
    """

    def __init__(self):
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def hold(self, base_slug: str) -> AsyncIterator[None]:
        lock = self._locks.get(base_slug)
        if lock is None:
            lock = self._locks[base_slug] = asyncio.Lock()
        self._users[base_slug] = self._users.get(base_slug, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[base_slug] -= 1
            if not self._users[base_slug]:
                del self._users[base_slug]
                del self._locks[base_slug]
