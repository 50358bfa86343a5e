"""
Enumeration Types
------------------

Enum classes for the VRC content models.

Enums:
    - ContentStatus: Publication state of a content record
    - ServiceType: Category of a service offering
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from enum import Enum
from typing import List


class ContentStatus(str, Enum):
    """
    Publication state of a content record.
    - DRAFT: Not visible on the website
    - PUBLISHED: Live
    """

    DRAFT = "draft"
    PUBLISHED = "published"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available status choices."""
        return [status.value for status in cls]


class ServiceType(str, Enum):
    """
    Category of a service offering.

    Labels are the Vietnamese names shown on the website.
    """

    CONSULTING = "consulting"
    INSTALLATION = "installation"
    MAINTENANCE = "maintenance"
    REPAIR = "repair"
    SUPPORT = "support"
    OTHER = "other"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available service type choices."""
        return [service_type.value for service_type in cls]

    @property
    def display_name(self) -> str:
        """Get human-readable display name."""
        display_map = {
            self.CONSULTING: "Tư vấn",
            self.INSTALLATION: "Lắp đặt",
            self.MAINTENANCE: "Bảo trì",
            self.REPAIR: "Sửa chữa",
            self.SUPPORT: "Hỗ trợ kỹ thuật",
            self.OTHER: "Khác",
        }
        return display_map.get(self, self.value.title())
