"""License graph models for license-notice.

Represents build artifacts (targets), their declared license conditions,
and the directed dependency edges between them. A graph is loaded once
per invocation and is read-only thereafter.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, PrivateAttr, field_validator, model_validator

from license_notice.exceptions import GraphIncomplete


class Category(Enum):
    """License obligation categories, one per notice section marker."""

    FIRST_PARTY = "first_party"
    NOTICE = "notice"
    RECIPROCAL = "reciprocal"
    RESTRICTED = "restricted"
    PROPRIETARY = "proprietary"

    @property
    def marker(self) -> str:
        """Literal marker line closing a section of this category."""
        return CATEGORY_MARKERS[self]

    @property
    def label(self) -> str:
        """Human readable category name."""
        return self.value.replace("_", " ").title()


CATEGORY_MARKERS: dict[Category, str] = {
    Category.FIRST_PARTY: "&&&First Party License&&&",
    Category.NOTICE: "%%%Notice License%%%",
    Category.RECIPROCAL: "$$$Reciprocal License$$$",
    Category.RESTRICTED: "###Restricted License###",
    Category.PROPRIETARY: "@@@Proprietary License@@@",
}

# Condition names found in build metadata, mapped onto categories
CONDITION_ALIASES: dict[str, Category] = {
    "first-party": Category.FIRST_PARTY,
    "firstparty": Category.FIRST_PARTY,
    "permissive": Category.NOTICE,
    "unencumbered": Category.NOTICE,
    "restricted_if_statically_linked": Category.RESTRICTED,
    "restricted_allows_dynamic_linking": Category.RESTRICTED,
    "restricted_with_classpath_exception": Category.RESTRICTED,
    "by_exception_only": Category.PROPRIETARY,
}


class LinkageKind(Enum):
    """How a dependent incorporates a dependency."""

    STATIC = "static"
    DYNAMIC = "dynamic"
    TOOLCHAIN = "toolchain"
    CONTAINER = "container"
    RUNTIME = "runtime"

    @property
    def ships(self) -> bool:
        """True if the dependency is physically present in the output."""
        return self is not LinkageKind.TOOLCHAIN


class TargetKind(Enum):
    """Kinds of build artifact."""

    APEX = "apex"
    CONTAINER = "container"
    APPLICATION = "application"
    BINARY = "binary"
    LIBRARY = "library"

    @property
    def is_container(self) -> bool:
        """True for artifacts that nest other artifacts under their install path."""
        return self in (TargetKind.APEX, TargetKind.CONTAINER)


class LicenseCondition(BaseModel):
    """A declared license condition on a target."""

    model_config = {"extra": "forbid", "frozen": True}

    category: Category = Field(description="Obligation category")
    license_text: Optional[str] = Field(
        default=None,
        description="Identifier or path of the license text body",
    )

    @field_validator("category", mode="before")
    @classmethod
    def _accept_condition_names(cls, value: Any) -> Any:
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized in CONDITION_ALIASES:
                return CONDITION_ALIASES[normalized]
            return normalized
        return value


class Target(BaseModel):
    """A build artifact node in the license graph."""

    model_config = {"extra": "forbid", "frozen": True}

    id: str = Field(min_length=1, description="Unique target identifier")
    kind: TargetKind = Field(description="Artifact kind")
    install_path: str = Field(
        min_length=1,
        description="Install path segment; relative to the output root for roots",
    )
    name: str = Field(
        default="",
        description="Install name; defaults to the last install path segment",
    )
    package: str = Field(
        min_length=1,
        description="Originating project or library used to group notices",
    )
    conditions: list[LicenseCondition] = Field(
        default_factory=list,
        description="Declared license conditions",
    )

    @model_validator(mode="before")
    @classmethod
    def _default_name(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("name"):
            install_path = data.get("install_path")
            if isinstance(install_path, str) and install_path.strip("/"):
                return {**data, "name": install_path.rstrip("/").split("/")[-1]}
        return data

    @property
    def is_container(self) -> bool:
        """True if this target nests dependencies under its install path."""
        return self.kind.is_container


class DependencyEdge(BaseModel):
    """A directed edge from a dependent target to one of its dependencies."""

    model_config = {"extra": "forbid", "frozen": True}

    dependent: str = Field(description="Identifier of the depending target")
    dependency: str = Field(description="Identifier of the target depended on")
    linkage: LinkageKind = Field(description="Linkage kind of the edge")
    install_path: Optional[str] = Field(
        default=None,
        description="Install segment of the dependency inside this dependent",
    )


class LicenseGraph(BaseModel):
    """Immutable license graph of targets and dependency edges."""

    model_config = {"extra": "forbid", "frozen": True}

    targets: list[Target] = Field(default_factory=list)
    edges: list[DependencyEdge] = Field(default_factory=list)

    _index: dict[str, Target] = PrivateAttr(default_factory=dict)
    _adjacency: dict[str, list[DependencyEdge]] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def _unique_ids(self) -> LicenseGraph:
        seen: set[str] = set()
        duplicates: list[str] = []
        for target in self.targets:
            if target.id in seen:
                duplicates.append(target.id)
            seen.add(target.id)
        if duplicates:
            raise ValueError(f"duplicate target ids: {', '.join(duplicates)}")
        return self

    def model_post_init(self, __context: Any) -> None:
        self._index = {target.id: target for target in self.targets}
        adjacency: dict[str, list[DependencyEdge]] = {}
        for edge in self.edges:
            adjacency.setdefault(edge.dependent, []).append(edge)
        self._adjacency = adjacency

    def __contains__(self, target_id: object) -> bool:
        return target_id in self._index

    def __len__(self) -> int:
        return len(self.targets)

    def get(self, target_id: str) -> Optional[Target]:
        """Look up a target by identifier.

        Args:
            target_id: Target identifier.

        Returns:
            The target, or None if the graph has no such target.
        """
        return self._index.get(target_id)

    def target(self, target_id: str) -> Target:
        """Look up a target that must exist.

        Raises:
            GraphIncomplete: If the graph has no such target.
        """
        found = self._index.get(target_id)
        if found is None:
            raise GraphIncomplete(f"target '{target_id}' not found in license graph")
        return found

    def dependencies_of(self, target_id: str) -> list[DependencyEdge]:
        """Get outgoing edges of a target in declaration order."""
        return list(self._adjacency.get(target_id, []))

    def check_complete(self) -> None:
        """Verify every edge endpoint names a target in the graph.

        Raises:
            GraphIncomplete: Listing each dangling edge.
        """
        dangling: list[str] = []
        for edge in self.edges:
            for end in (edge.dependent, edge.dependency):
                if end not in self._index:
                    dangling.append(
                        f"{edge.dependent} -> {edge.dependency} "
                        f"({edge.linkage.value}): unknown target '{end}'"
                    )
        if dangling:
            raise GraphIncomplete("malformed edges: " + "; ".join(dangling))
