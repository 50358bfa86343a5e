#!/usr/bin/env python3
"""
filters.py
----------
Query predicates accepted by RecordStore.find().

    Equals(field, value)     field == value
    Contains(field, value)   value is a member of the relationship list
                             stored in field (any reference shape)

A ``where`` argument is a single predicate or a list of predicates that
must all hold.

Usage:
    store.find("services", Equals("slug", "tu-van-thiet-ke"), limit=1)
    store.find("products", Contains("related_products", product_id))
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Union


@dataclass(frozen=True)
class Equals:
    """Exact match on a scalar field."""

    field: str
    value: Any


@dataclass(frozen=True)
class Contains:
    """Membership of an ID in a relationship field."""

    field: str
    value: str


Filter = Union[Equals, Contains]
Where = Optional[Union[Filter, Sequence[Filter]]]


def as_filter_list(where: Where) -> List[Filter]:
    """Normalize a ``where`` argument to a list of predicates."""
    if where is None:
        return []
    if isinstance(where, (Equals, Contains)):
        return [where]
    return list(where)
