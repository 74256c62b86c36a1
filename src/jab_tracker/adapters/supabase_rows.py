"""Helpers for turning Supabase rows into domain values."""

from datetime import UTC, date, datetime

from jab_tracker.domain.models import InjectionSite


def parse_datetime(raw: object) -> datetime:
    """Parse an ISO timestamp, assuming UTC when no offset is present."""
    if not isinstance(raw, str) or not raw:
        raise RuntimeError(f"Missing timestamp in Supabase row: {raw!r}")
    parsed = datetime.fromisoformat(raw)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def parse_date(raw: object) -> date:
    if not isinstance(raw, str) or not raw:
        raise RuntimeError(f"Missing date in Supabase row: {raw!r}")
    return date.fromisoformat(raw[:10])


def optional_date(raw: object) -> date | None:
    return parse_date(raw) if raw else None


def optional_float(raw: object) -> float | None:
    if raw is None or raw == "":
        return None
    return float(raw)  # type: ignore[arg-type]


def optional_int(raw: object) -> int | None:
    if raw is None or raw == "":
        return None
    return int(raw)  # type: ignore[call-overload]


def one_or_none(raw: object) -> dict[str, object] | None:
    """Return a single embedded row, which Supabase may wrap in a list."""
    if isinstance(raw, list):
        return raw[0] if raw else None
    if isinstance(raw, dict):
        return raw
    return None


def optional_str(raw: object) -> str | None:
    return str(raw) if raw not in (None, "") else None


_SITE_ALIASES = {"abdomen": InjectionSite.ABDOMEN_LEFT}


def parse_site(raw: object) -> InjectionSite:
    """Map a stored site name or display label onto an InjectionSite.

    Rows may hold snake-case names (`thigh_left`), display labels
    (`Upper Arm - Left`) or the side-less `abdomen`, stored as the left side.
    """
    if not isinstance(raw, str) or not raw.strip():
        raise RuntimeError(f"Missing injection site in Supabase row: {raw!r}")
    key = raw.strip().lower().replace(" - ", "_").replace("upper arm", "arm")
    key = key.replace(" ", "_")
    if key in _SITE_ALIASES:
        return _SITE_ALIASES[key]
    try:
        return InjectionSite(key)
    except ValueError as exc:
        raise RuntimeError(f"Unknown injection site in Supabase row: {raw!r}") from exc
