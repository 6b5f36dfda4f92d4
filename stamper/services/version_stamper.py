# stamper/services/version_stamper.py

import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, Optional

from stamper.models.stamp import BuildVariant, InvalidInput, VersionStamp
from stamper.models import variants as variants_model


def capture_instant() -> datetime:
    """Reads the clock once and returns the current instant as an aware UTC datetime.

    Callers capture this once per configuration pass and pass it to every
    `stamp` call, so variants built together never straddle a date rollover.
    """
    instant = datetime.now(timezone.utc)
    logging.debug(f"[STAMP] Captured build instant {instant.isoformat()}")
    return instant


def to_instant(value) -> datetime:
    """Coerces an aware datetime, epoch seconds or ISO-8601 string into an aware UTC datetime."""
    if isinstance(value, datetime):
        instant = value
    elif isinstance(value, bool):
        raise InvalidInput("Instant must be a datetime, epoch seconds or ISO-8601 string, got bool")
    elif isinstance(value, (int, float)):
        try:
            instant = datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise InvalidInput(f"Epoch seconds {value!r} are out of range: {e}") from e
    elif isinstance(value, str):
        text = value.strip()
        # fromisoformat only understands 'Z' on newer interpreters
        if text.endswith(('Z', 'z')):
            text = text[:-1] + '+00:00'
        try:
            instant = datetime.fromisoformat(text)
        except ValueError as e:
            raise InvalidInput(f"Cannot parse instant '{value}': {e}") from e
    else:
        raise InvalidInput(f"Instant must be a datetime, epoch seconds or ISO-8601 string, got {type(value).__name__}")

    if instant.tzinfo is None or instant.utcoffset() is None:
        raise InvalidInput(f"Instant '{instant.isoformat()}' has no UTC offset; it is not an absolute time")

    try:
        return instant.astimezone(timezone.utc)
    except (OverflowError, ValueError) as e:
        raise InvalidInput(f"Instant '{instant.isoformat()}' cannot be represented in the UTC calendar") from e


def version_code(utc: datetime) -> int:
    """Returns the calendar date of an already-normalized UTC datetime as a YYYYMMDD integer."""
    return utc.year * 10000 + utc.month * 100 + utc.day


def version_name(utc: datetime, variant: BuildVariant) -> str:
    """Returns 'YYYY.MM.DD' for release builds and 'YYYY.MM.DD HH:mm:ss UTC' for debug builds.

    Expects a datetime already normalized by `to_instant`.
    """
    date_part = f"{utc.year:04d}.{utc.month:02d}.{utc.day:02d}"
    if BuildVariant.parse(variant) is BuildVariant.DEBUG:
        return f"{date_part} {utc.hour:02d}:{utc.minute:02d}:{utc.second:02d} UTC"
    return date_part


def stamp(instant, variant) -> VersionStamp:
    """Derives the version code and name for one build variant from a captured instant."""
    utc = to_instant(instant)
    build_type = BuildVariant.parse(variant)
    result = VersionStamp(code=version_code(utc), name=version_name(utc, build_type))
    logging.debug(f"[STAMP] {build_type.value}: code={result.code} name='{result.name}'")
    return result


def stamp_pass(instant, variant_names: Optional[Iterable[str]] = None) -> Dict[str, VersionStamp]:
    """Stamps every variant of one configuration pass from the same instant.

    With no names, every registered flavor is combined with every build type.
    Returns a dict of variant name -> VersionStamp in the order given.
    """
    utc = to_instant(instant)
    names = list(variant_names or [])
    if not names:
        names = variants_model.all_variant_names()
    stamps: Dict[str, VersionStamp] = {}
    for name in names:
        _, build_type = variants_model.resolve_variant(name)
        stamps[name] = stamp(utc, build_type)
    logging.info(f"[PASS] Stamped {len(stamps)} variant(s) at {utc.isoformat()}: {', '.join(stamps)}")
    return stamps
