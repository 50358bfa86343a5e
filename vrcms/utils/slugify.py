#!/usr/bin/env python3
"""
slugify.py
----------
Slug generation for content records.

Content collections carry a ``slug`` natural key used in URLs and as the
seed idempotency key. When a record is created without one, the slug is
derived from a source field (``name`` or ``title``).

Key Features:
    - Lowercase transformation
    - Accent/diacritic normalization (Tư vấn → tu-van)
    - Vietnamese đ/Đ mapped to d
    - Space and underscore to hyphen conversion
    - Maximum length enforcement

Usage:
    from vrcms.utils.slugify import slugify, resolve_slug

    slugify("Tư vấn thiết kế")  # "tu-van-thiet-ke"
    resolve_slug({"title": "Bảo trì định kỳ"}, "title")  # "bao-tri-dinh-ky"
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
import unicodedata
from typing import Any, Dict, Optional


def slugify(text: str, max_length: int = 200) -> str:
    """
    Convert text to a URL-safe slug.

    Args:
        text: Input text to slugify
        max_length: Maximum slug length (default 200)

    Returns:
        Slugified string

    Examples:
        >>> slugify("Tư vấn thiết kế")
        'tu-van-thiet-ke'
        >>> slugify("Lắp đặt chuyên nghiệp")
        'lap-dat-chuyen-nghiep'
        >>> slugify("Inverter DC (2024)")
        'inverter-dc-2024'
    """
    if not text:
        return ""

    # đ has no decomposition, map it before stripping accents
    text = text.replace("đ", "d").replace("Đ", "D")

    text = unicodedata.normalize("NFKD", text)
    text = text.encode("ascii", "ignore").decode("ascii")
    text = text.lower()

    text = text.replace("'", "")
    text = re.sub(r"[(){}\[\]]", " ", text)
    text = text.replace("&", "and")
    text = text.replace("/", "-")
    text = re.sub(r"[\s_]+", "-", text)
    text = re.sub(r"[^a-z0-9-]", "", text)
    text = re.sub(r"-+", "-", text)
    text = text.strip("-")

    if len(text) > max_length:
        text = text[:max_length].rstrip("-")

    return text


def resolve_slug(
    data: Dict[str, Any], source_field: Optional[str], slug_field: str = "slug"
) -> Optional[str]:
    """
    Compute the slug a record should be stored with on create.

    A supplied slug is formatted; otherwise the slug is derived from
    ``source_field``. Returns None when neither yields anything.

    Args:
        data: Incoming record data
        source_field: Field to derive from (e.g. 'title'), or None
        slug_field: Name of the slug field

    Returns:
        Formatted slug or None

    Examples:
        >>> resolve_slug({"slug": "Tu Van"}, "title")
        'tu-van'
        >>> resolve_slug({"title": "Hỗ trợ kỹ thuật"}, "title")
        'ho-tro-ky-thuat'
        >>> resolve_slug({}, "title") is None
        True
    """
    value = data.get(slug_field)
    if isinstance(value, str) and value.strip():
        return slugify(value) or None

    if source_field:
        fallback = data.get(source_field)
        if isinstance(fallback, str) and fallback.strip():
            return slugify(fallback) or None

    return None
