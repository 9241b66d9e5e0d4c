"""Page/limit sanitising shared by list operations."""

from cms.config import get_settings


def sanitize_page(page: int | None, limit: int | None) -> tuple[int, int, int]:
    """
    Clamp page and limit into range.

    Page is at least 1; limit falls back to the configured default and is
    clamped to 1..max_page_size.

    Returns:
        Tuple of (page, limit, offset)
    """
    settings = get_settings()
    page = max(1, page if page is not None else 1)
    if limit is None:
        limit = settings.default_page_size
    limit = min(settings.max_page_size, max(1, limit))
    return page, limit, (page - 1) * limit
