"""
Content Models
---------------

Models for the website's content collections.

Models:
    - Media: Uploaded files (images, documents)
    - Product: Catalogue products
    - Tool: Engineering calculators and utilities
    - Service: Service offerings

Relationship fields (``related_products``, ``related_tools``,
``related_services``) are JSON lists. Their elements may be bare ID strings
or objects carrying ``id`` or ``value``; the integrity package knows how to
read every shape. Media references (``main_image``, ``featured_image``) hold
the media record ID.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Any, Dict, List, Optional

# --- Third party imports ---
from sqlalchemy import JSON, Boolean, CheckConstraint, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

# --- Local imports ---
from .base import Base, RecordMixin, TimestampMixin


def _status_check(table: str) -> CheckConstraint:
    return CheckConstraint(
        "status IN ('draft', 'published')", name=f"ck_{table}_status"
    )


class Media(Base, RecordMixin, TimestampMixin):
    """
    An uploaded file stored under the media directory.

    Attributes:
        id: Opaque record ID
        filename: Unique stored filename
        alt: Alternative text
        mime_type: Detected MIME type
        filesize: Size in bytes
        url: Public URL path of the file
    """

    __tablename__ = "media"
    __table_args__ = (
        CheckConstraint("filename != ''", name="ck_media_non_empty_filename"),
    )

    filename: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    alt: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    mime_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    filesize: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    def __repr__(self) -> str:
        return f"<Media(id={self.id}, filename='{self.filename}')>"


class Product(Base, RecordMixin, TimestampMixin):
    """
    A catalogue product.

    Attributes:
        name: Display name
        slug: URL key, derived from name when not supplied
        excerpt: Short description
        description: Long description
        main_image: Media record ID
        category: Free-form category label
        featured: Shown on the homepage
        related_products: Relationship list to other products
        specifications: List of {name, value} pairs
        product_code: Internal catalogue code
        sort_order: Manual ordering
        status: draft or published
    """

    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("name != ''", name="ck_product_non_empty_name"),
        _status_check("products"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    excerpt: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    main_image: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    related_products: Mapped[List[Any]] = mapped_column(JSON, default=list, nullable=False)
    specifications: Mapped[List[Any]] = mapped_column(JSON, default=list, nullable=False)
    product_code: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="draft", nullable=False)

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, slug='{self.slug}')>"


class Tool(Base, RecordMixin, TimestampMixin):
    """
    An engineering tool or calculator.

    Attributes:
        name: Display name
        slug: URL key, derived from name when not supplied
        category: Tool category label
        excerpt: Short description
        description: Long description
        tool_type: Calculator, converter, reference...
        url: External URL for hosted tools
        features: List of feature strings
        related_tools: Relationship list to other tools
        featured: Shown on the homepage
        status: draft or published
    """

    __tablename__ = "tools"
    __table_args__ = (
        CheckConstraint("name != ''", name="ck_tool_non_empty_name"),
        _status_check("tools"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    category: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    excerpt: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    tool_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    features: Mapped[List[Any]] = mapped_column(JSON, default=list, nullable=False)
    related_tools: Mapped[List[Any]] = mapped_column(JSON, default=list, nullable=False)
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="draft", nullable=False)

    def __repr__(self) -> str:
        return f"<Tool(id={self.id}, slug='{self.slug}')>"


class Service(Base, RecordMixin, TimestampMixin):
    """
    A service offering.

    Attributes:
        title: Display title
        slug: URL key, derived from title when not supplied
        type: ServiceType value
        summary: Short description
        content: Long-form body text
        featured_image: Media record ID
        features: List of {title, description, icon}
        benefits: List of {title, description}
        faq: List of {question, answer}
        order: Manual ordering
        featured: Shown on the homepage
        related_services: Relationship list to other services
        status: draft or published
        pricing: {show_pricing, price_type, custom_price, currency}
        meta: SEO {title, description}
    """

    __tablename__ = "services"
    __table_args__ = (
        CheckConstraint("title != ''", name="ck_service_non_empty_title"),
        CheckConstraint(
            "type IN ('consulting', 'installation', 'maintenance', "
            "'repair', 'support', 'other')",
            name="ck_services_type",
        ),
        _status_check("services"),
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    type: Mapped[str] = mapped_column(String(20), default="other", nullable=False)
    summary: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    featured_image: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    features: Mapped[List[Any]] = mapped_column(JSON, default=list, nullable=False)
    benefits: Mapped[List[Any]] = mapped_column(JSON, default=list, nullable=False)
    faq: Mapped[List[Any]] = mapped_column(JSON, default=list, nullable=False)
    order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    related_services: Mapped[List[Any]] = mapped_column(JSON, default=list, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="draft", nullable=False)
    pricing: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON, nullable=True)
    meta: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON, nullable=True)

    def __repr__(self) -> str:
        return f"<Service(id={self.id}, slug='{self.slug}')>"
