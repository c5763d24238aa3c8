"""Ordered field lookups over untyped provider payloads.

Each provider names the same concept differently, so every canonical field
is resolved from an ordered tuple of extractors. An extractor takes the raw
route and returns a value or None; the combinators pick the first hit.
"""

from typing import Any, Callable, Iterable, Mapping, Optional, Sequence, Union

Extractor = Callable[[Any], Optional[Any]]


def read_path(node: Any, path: Sequence[Union[str, int]]) -> Optional[Any]:
    """Traverse nested dicts/lists by keys and indices.

    Negative indices count from the end of a list. Any miss returns None.
    """
    current = node
    for part in path:
        if isinstance(part, int):
            if isinstance(current, list) and -len(current) <= part < len(current):
                current = current[part]
            else:
                return None
        elif isinstance(current, Mapping) and part in current:
            current = current[part]
        else:
            return None
    return current


def field_path(*path: Union[str, int]) -> Extractor:
    """Build an extractor for a fixed path."""

    def extract(node: Any) -> Optional[Any]:
        return read_path(node, path)

    extract.__name__ = ".".join(str(part) for part in path)
    return extract


def scaled(extractor: Extractor, divisor: float) -> Extractor:
    """Divide a numeric extracted value; non-numeric or zero values miss."""

    def extract(node: Any) -> Optional[Any]:
        value = extractor(node)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not value:
            return None
        try:
            return value / divisor
        except OverflowError:
            return None

    extract.__name__ = f"{extractor.__name__}/{divisor:g}"
    return extract


def first_present(node: Any, extractors: Iterable[Extractor]) -> Optional[Any]:
    """Return the first extracted value that is not None."""
    for extractor in extractors:
        value = extractor(node)
        if value is not None:
            return value
    return None


def first_truthy(node: Any, extractors: Iterable[Extractor]) -> Optional[Any]:
    """Return the first extracted value that is truthy."""
    for extractor in extractors:
        value = extractor(node)
        if value:
            return value
    return None
