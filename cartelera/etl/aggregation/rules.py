"""Admission rules: recency window and platform/genre filters."""

from collections.abc import Iterable
from datetime import UTC, date, datetime

from cartelera.etl.aggregation.schemas import Item

SECONDS_PER_DAY = 86400


def parse_iso_date(value: str | date | None) -> datetime | None:
    """Parse a YYYY-MM-DD value as midnight UTC.

    Args:
        value: ISO date string, date object, or None.

    Returns:
        Aware datetime, None when absent or unparsable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=UTC)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    try:
        parsed = date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None
    return datetime(parsed.year, parsed.month, parsed.day, tzinfo=UTC)


def in_window(
    date_iso: str | date | None,
    days: int,
    now: datetime | str | None = None,
) -> bool:
    """Check that a date falls within the trailing `days` window.

    Args:
        date_iso: Release or air date (YYYY-MM-DD).
        days: Window length in days.
        now: Reference instant, current UTC time by default.

    Returns:
        True iff 0 <= (now - date) in days <= days.
    """
    moment = parse_iso_date(date_iso)
    if moment is None:
        return False

    if now is None:
        reference = datetime.now(UTC)
    else:
        reference = parse_iso_date(now)
        if reference is None:
            return False

    diff_days = (reference - moment).total_seconds() / SECONDS_PER_DAY
    return 0 <= diff_days <= days


def passes_filters(
    item: Item,
    platforms: Iterable[str] | None = None,
    genres: Iterable[str] | None = None,
) -> bool:
    """Platform and genre filter.

    Within a dimension any selected value is enough; both dimensions
    must pass. An empty selection lets everything through.

    Args:
        item: Catalog item.
        platforms: Selected platform names.
        genres: Selected genre names.

    Returns:
        True if the item passes both filters.
    """
    selected_platforms = list(platforms or [])
    selected_genres = list(genres or [])

    item_platforms = {str(p) for p in item.platforms}
    item_genres = {str(g) for g in item.genres}

    platform_ok = not selected_platforms or any(p in item_platforms for p in selected_platforms)
    genre_ok = not selected_genres or any(g in item_genres for g in selected_genres)

    return platform_ok and genre_ok
