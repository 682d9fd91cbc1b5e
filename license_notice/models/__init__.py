"""Pydantic data models for license-notice."""

from license_notice.models.config import (
    DEFAULT_SECTION_PRECEDENCE,
    LinkagePolicy,
    NoticeConfig,
)
from license_notice.models.graph import (
    Category,
    DependencyEdge,
    LicenseCondition,
    LicenseGraph,
    LinkageKind,
    Target,
    TargetKind,
)
from license_notice.models.resolution import LibraryBlock, NoticeSection, Resolution

__all__ = [
    "Category",
    "DEFAULT_SECTION_PRECEDENCE",
    "DependencyEdge",
    "LibraryBlock",
    "LicenseCondition",
    "LicenseGraph",
    "LinkageKind",
    "LinkagePolicy",
    "NoticeConfig",
    "NoticeSection",
    "Resolution",
    "Target",
    "TargetKind",
]
