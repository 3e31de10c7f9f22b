"""Color utilities for style definitions."""

from typing import Dict, Optional

from .exceptions import ErrorKind, StyleValidationError

HEX_DIGITS = set('0123456789abcdefABCDEF')

COLOR_MAP: Dict[str, str] = {
    'black': '000000',
    'white': 'FFFFFF',
    'red': 'FF0000',
    'green': '008000',
    'blue': '0000FF',
    'yellow': 'FFFF00',
    'cyan': '00FFFF',
    'magenta': 'FF00FF',
}


def is_hex_color(value: Optional[str]) -> bool:
    """Return True for six hex digits with an optional leading ``#``."""
    if not value or not isinstance(value, str):
        return False
    value = value[1:] if value.startswith('#') else value
    return len(value) == 6 and all(c in HEX_DIGITS for c in value)


def normalize_hex_color(value: str, field_name: str = 'color') -> str:
    """
    Normalize a hex colour to six upper-case digits without ``#``.

    Raises:
        StyleValidationError: If the value is not six hex digits
    """
    if not is_hex_color(value):
        raise StyleValidationError(
            f"Invalid color format: '{value}' (expected 6 hex digits)",
            kind=ErrorKind.INVALID_COLOR_FORMAT,
            field_name=field_name, field_value=value,
        )
    return value.lstrip('#').upper()


def parse_color(text: str) -> str:
    """
    Parse a colour name or hex value.

    Args:
        text: Named colour (``red``) or hex value (``#FF0000``, ``ff0000``)

    Returns:
        Six upper-case hex digits without ``#``

    Raises:
        StyleValidationError: If the value is empty or not a valid colour
    """
    if text is None or not str(text).strip():
        raise StyleValidationError(
            "Empty color string", kind=ErrorKind.INVALID_COLOR_FORMAT,
            field_name='color', field_value=text,
            context={'operation': 'parse_color'},
        )
    text = str(text).strip()
    named = COLOR_MAP.get(text.lower())
    if named:
        return named
    return normalize_hex_color(text)
