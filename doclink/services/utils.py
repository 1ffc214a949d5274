from collections.abc import Iterable
from datetime import UTC, datetime

from doclink.constants import LIKE_ESCAPE_CHAR


def now_utc() -> datetime:
    return datetime.now(UTC)


def normalize_ids(values: Iterable[str] | None) -> list[str]:
    seen: set[str] = set()
    ids: list[str] = []
    for value in values or []:
        compact = value.strip()
        if not compact or compact in seen:
            continue
        seen.add(compact)
        ids.append(compact)
    return ids


def escape_like(value: str) -> str:
    for char in (LIKE_ESCAPE_CHAR, "%", "_"):
        value = value.replace(char, LIKE_ESCAPE_CHAR + char)
    return value
