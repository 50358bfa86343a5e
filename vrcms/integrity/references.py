#!/usr/bin/env python3
"""
references.py
-------------
Reading and stripping the entries of a relationship field.

A relationship field is stored as a JSON list. Depending on how the record
was written (admin UI, API, seed script) each element can be:

    "a1b2..."                       bare ID string
    {"id": "a1b2...", ...}          populated document
    {"relationTo": "products",
     "value": "a1b2..."}            polymorphic reference
    anything else                   unknown shape

Each element is parsed into one variant of a small tagged union so callers
can match on the shape instead of probing dictionaries.

Rules:
    - Equality is exact string equality. 5 is never "5".
    - Unknown shapes never match and are always kept.
    - strip_reference never mutates its input and keeps order and shape.

Usage:
    from vrcms.integrity.references import strip_reference

    strip_reference(["a", {"id": "b"}, {"value": "a"}, 7], "a")
    # [{"id": "b"}, 7]
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Union


@dataclass(frozen=True)
class BareReference:
    """A bare ID string."""

    id: str


@dataclass(frozen=True)
class IdReference:
    """
    An object carrying the referenced ID under ``id``.

    Legacy documents sometimes carry a string ``value`` next to ``id``;
    it is kept so either key can match.
    """

    id: str
    value: Optional[str] = None


@dataclass(frozen=True)
class ValueReference:
    """An object carrying the referenced ID under ``value``."""

    id: str


@dataclass(frozen=True)
class UnknownReference:
    """Any element whose shape is not recognised."""

    raw: Any


Reference = Union[BareReference, IdReference, ValueReference, UnknownReference]


def parse_reference(element: Any) -> Reference:
    """
    Classify one relationship entry.

    An object with a string ``id`` is an IdReference even if it also has
    ``value``. Objects with neither a string ``id`` nor a string ``value``
    are unknown.

    Examples:
        >>> parse_reference("abc")
        BareReference(id='abc')
        >>> parse_reference({"relationTo": "tools", "value": "abc"})
        ValueReference(id='abc')
        >>> parse_reference({"id": 5})
        UnknownReference(raw={'id': 5})
    """
    if isinstance(element, str):
        return BareReference(element)

    if isinstance(element, dict):
        value = element.get("value")
        if isinstance(element.get("id"), str):
            return IdReference(element["id"], value if isinstance(value, str) else None)
        if isinstance(value, str):
            return ValueReference(value)

    return UnknownReference(element)


def resolved_id(element: Any) -> Optional[str]:
    """
    The ID an entry points at, or None for unknown shapes.
    """
    ref = parse_reference(element)
    if isinstance(ref, UnknownReference):
        return None
    return ref.id


def references_target(element: Any, target_id: str) -> bool:
    """Whether an entry resolves to ``target_id``."""
    ref = parse_reference(element)
    if isinstance(ref, IdReference):
        return target_id in (ref.id, ref.value)
    if isinstance(ref, (BareReference, ValueReference)):
        return ref.id == target_id
    return False


def contains_reference(values: Any, target_id: str) -> bool:
    """
    Whether a stored relationship value holds an entry for ``target_id``.

    Anything that is not a list holds nothing.
    """
    if not isinstance(values, list):
        return False
    return any(references_target(element, target_id) for element in values)


def strip_reference(values: Iterable[Any], target_id: str) -> List[Any]:
    """
    Remove every entry that resolves to ``target_id``.

    Args:
        values: Current relationship entries
        target_id: ID of the deleted record

    Returns:
        New list with the surviving entries, in their original order and
        shape. Applying it twice gives the same result as once.
    """
    return [
        element for element in values if not references_target(element, target_id)
    ]


def as_reference_list(value: Any) -> List[Any]:
    """
    Read a stored relationship value as a list.

    Missing or malformed values (None, a bare dict, a string) hold no
    references and read as an empty list.
    """
    if isinstance(value, list):
        return value
    return []
