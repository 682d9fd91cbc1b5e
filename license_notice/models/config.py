"""Configuration Pydantic models for license-notice."""
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from license_notice.models.graph import Category, LinkageKind

# Section tie-break order, calibrated against the reference notices
DEFAULT_SECTION_PRECEDENCE: list[Category] = [
    Category.NOTICE,
    Category.RECIPROCAL,
    Category.RESTRICTED,
    Category.FIRST_PARTY,
    Category.PROPRIETARY,
]


class LinkagePolicy(BaseModel):
    """Which condition categories propagate across each linkage kind.

    Toolchain edges never ship, so nothing propagates across them
    regardless of the configured categories.
    """

    model_config = {"extra": "forbid"}

    propagates: Dict[LinkageKind, List[Category]] = Field(
        default_factory=lambda: {
            LinkageKind.STATIC: list(Category),
            LinkageKind.DYNAMIC: list(Category),
            LinkageKind.RUNTIME: list(Category),
            LinkageKind.CONTAINER: list(Category),
            LinkageKind.TOOLCHAIN: [],
        },
        description="Categories propagated across each linkage kind",
    )

    def ships(self, linkage: LinkageKind) -> bool:
        """True if a dependency reached over this linkage is shipped."""
        return linkage.ships

    def propagated(self, linkage: LinkageKind) -> frozenset[Category]:
        """Categories that propagate across an edge of this linkage."""
        if not linkage.ships:
            return frozenset()
        return frozenset(self.propagates.get(linkage, []))

    @classmethod
    def with_overrides(
        cls, overrides: Optional[Dict[LinkageKind, List[Category]]]
    ) -> LinkagePolicy:
        """Build the default policy with configured kinds replaced.

        Args:
            overrides: Mapping of linkage kind to propagated categories.

        Returns:
            LinkagePolicy with overrides applied.
        """
        policy = cls()
        if overrides:
            policy.propagates.update(overrides)
        return policy


class NoticeConfig(BaseModel):
    """Configuration for license-notice.

    All fields are optional with None defaults to allow partial configuration.
    """

    model_config = {"extra": "forbid"}

    output_root: Optional[str] = Field(
        default=None,
        description="Build-output root prefixed to every installed path.",
    )
    strip_prefix: Optional[str] = Field(
        default=None,
        description="Prefix removed from installed paths in the report.",
    )
    title: Optional[str] = Field(
        default=None,
        description="Title line printed before the first section.",
    )
    section_precedence: Optional[List[Category]] = Field(
        default=None,
        description="Category order used to break ties between sections.",
    )
    linkage_policy: Optional[Dict[LinkageKind, List[Category]]] = Field(
        default=None,
        description="Categories propagated per linkage kind.",
    )
    texts_dir: Optional[str] = Field(
        default=None,
        description="Directory license text identifiers are resolved against.",
    )

    @field_validator("section_precedence")
    @classmethod
    def _no_repeated_categories(
        cls, value: Optional[List[Category]]
    ) -> Optional[List[Category]]:
        if value is not None and len(set(value)) != len(value):
            raise ValueError("section_precedence lists a category more than once")
        return value
