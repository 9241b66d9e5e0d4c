"""
Slug Allocator

Turns titles into URL-safe slugs and finds a free slug within a uniqueness
scope by probing numbered suffixes.

Allocation is check-then-act: two writers racing on the same base slug can
both be handed the same candidate. The loser surfaces as a uniqueness error
from the database constraint on (organization_id, slug).
"""

import logging
import re
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)

SlugExists = Callable[[str], Awaitable[bool]]

# Width of the slug columns on document_types and contents
SLUG_MAX_LENGTH = 100

_NON_WORD = re.compile(r"[^\w\s-]", re.ASCII)
_SEPARATORS = re.compile(r"[\s_-]+")


def slugify(text: str, max_length: int = SLUG_MAX_LENGTH) -> str:
    """
    Build a URL-safe slug from free text.

    Lowercases, drops anything that is not a word character, whitespace or
    hyphen, collapses runs of whitespace/underscores/hyphens into one hyphen,
    and trims hyphens from both ends. The result is cut to ``max_length``
    characters.

    Example:
        slugify("  Hello, World_Again ") -> "hello-world-again"
    """
    if not text:
        return ""
    slug = _NON_WORD.sub("", text.lower().strip())
    slug = _SEPARATORS.sub("-", slug).strip("-")
    return slug[:max_length].rstrip("-")


async def allocate_unique_slug(
    base: str,
    exists: SlugExists,
    original_exists: SlugExists | None = None,
    max_length: int = SLUG_MAX_LENGTH,
) -> str:
    """
    Return ``base`` if it is free, otherwise the first free ``base-N``.

    Candidates are tried serially, one lookup each, starting at N=1 with no
    upper bound. Lookup errors propagate immediately. No returned slug is
    longer than ``max_length``: the base is cut so that it plus its suffix
    fits.

    Args:
        base: Desired slug
        exists: Collision check for a candidate slug within the scope
        original_exists: Collision check for ``base`` itself when it must be
            tested against a wider predicate than the suffixed candidates
            (document types check title or slug); defaults to ``exists``
        max_length: Width of the slug column

    Returns:
        A slug that did not collide at the time it was checked
    """
    base = base[:max_length]
    check_original = original_exists or exists
    if not await check_original(base):
        return base

    counter = 1
    while True:
        suffix = f"-{counter}"
        candidate = base[: max_length - len(suffix)].rstrip("-") + suffix
        if not await exists(candidate):
            logger.info(f"Slug '{base}' is taken, using '{candidate}'")
            return candidate
        counter += 1
