from typing import Any

from doclink.constants import MAX_SQL_INTEGER


class ValidationError(ValueError):
    pass


class EmptySelectionError(ValidationError):
    pass


def require(condition: bool, message: str) -> None:
    if not condition:
        raise ValidationError(message)


def coerce_positive_int(value: Any, field_name: str) -> int:
    """Accept ints, integral floats and numeric strings; reject everything else.

    Page numbers reach the service loosely typed (query strings, JSON numbers
    such as ``2.0``), so they are normalised here before any offset arithmetic.
    """
    message = f"{field_name} must be a positive integer"
    if isinstance(value, bool):
        raise ValidationError(message)
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        require(value.is_integer(), message)
        number = int(value)
    elif isinstance(value, str):
        text = value.strip()
        try:
            number = int(text)
        except ValueError:
            try:
                parsed = float(text)
            except ValueError as exc:
                raise ValidationError(message) from exc
            require(parsed.is_integer(), message)
            number = int(parsed)
    else:
        raise ValidationError(message)
    require(number >= 1, f"{field_name} must be >= 1")
    return number


def validate_page_size(page_size: int, max_page_size: int) -> None:
    require(page_size <= max_page_size, f"page_size must be <= {max_page_size}")


def validate_offset(page: int, page_size: int) -> None:
    # OFFSET and LIMIT are bound as signed 64-bit integers.
    require((page - 1) * page_size + page_size + 1 <= MAX_SQL_INTEGER, "page is too large for the given page_size")
