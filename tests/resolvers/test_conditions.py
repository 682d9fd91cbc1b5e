"""Tests for the condition resolver."""
from __future__ import annotations

from typing import Optional

import pytest

from license_notice.exceptions import CycleDetected, GraphIncomplete, RootNotFound
from license_notice.models.config import LinkagePolicy
from license_notice.models.graph import (
    Category,
    DependencyEdge,
    LicenseCondition,
    LicenseGraph,
    LinkageKind,
    Target,
    TargetKind,
)
from license_notice.resolvers.conditions import ConditionResolver
from license_notice.resolvers.paths import InstallPathBuilder


def _target(
    target_id: str,
    kind: TargetKind = TargetKind.LIBRARY,
    package: str = "Android",
    categories: Optional[list[Category]] = None,
    install_path: Optional[str] = None,
) -> Target:
    """Create a target with one condition per category."""
    return Target(
        id=target_id,
        kind=kind,
        install_path=install_path or target_id,
        package=package,
        conditions=[LicenseCondition(category=c) for c in categories or []],
    )


def _edge(
    dependent: str,
    dependency: str,
    linkage: LinkageKind,
    install_path: Optional[str] = None,
) -> DependencyEdge:
    return DependencyEdge(
        dependent=dependent,
        dependency=dependency,
        linkage=linkage,
        install_path=install_path,
    )


def _triples(graph: LicenseGraph, roots: list[str]) -> list[tuple[str, str, str]]:
    """Resolve and return (category, library, path) triples."""
    return [
        (r.category.value, r.library, r.install_path)
        for r in ConditionResolver(graph).resolve(roots)
    ]


class TestConditionResolverErrors:
    """Tests for resolver failure modes."""

    def test_missing_root_raises_root_not_found(self) -> None:
        """Test that an unknown root raises RootNotFound."""
        graph = LicenseGraph(targets=[_target("bin1", TargetKind.BINARY)])

        with pytest.raises(RootNotFound) as exc_info:
            ConditionResolver(graph).resolve(["missing"])
        assert exc_info.value.root == "missing"

    def test_root_not_found_is_graph_incomplete(self) -> None:
        """Test that RootNotFound can be caught as GraphIncomplete."""
        graph = LicenseGraph(targets=[])

        with pytest.raises(GraphIncomplete):
            ConditionResolver(graph).resolve(["missing"])

    def test_empty_root_list_raises(self) -> None:
        """Test that resolving without roots fails."""
        graph = LicenseGraph(targets=[_target("bin1", TargetKind.BINARY)])

        with pytest.raises(GraphIncomplete):
            ConditionResolver(graph).resolve([])

    def test_dangling_edge_raises_graph_incomplete(self) -> None:
        """Test that an edge to an unknown target fails before traversal."""
        graph = LicenseGraph(
            targets=[_target("bin1", TargetKind.BINARY, categories=[Category.NOTICE])],
            edges=[_edge("bin1", "libmissing.so", LinkageKind.STATIC)],
        )

        with pytest.raises(GraphIncomplete) as exc_info:
            ConditionResolver(graph).resolve(["bin1"])
        assert "libmissing.so" in str(exc_info.value)

    def test_cycle_detected_when_trail_exceeds_graph(self) -> None:
        """Test the defensive check on a trail longer than the graph."""
        target = _target("a.apex", TargetKind.APEX)
        graph = LicenseGraph(targets=[target])
        resolver = ConditionResolver(graph)

        with pytest.raises(CycleDetected):
            resolver._walk(
                target,
                root=target,
                trail=["a.apex", "a.apex"],
                edges=[],
                allowed=frozenset(Category),
                resolutions=[],
                seen=set(),
                walked={},
            )


class TestConditionResolverPropagation:
    """Tests for condition propagation along edges."""

    def test_own_conditions_recorded_at_root_path(self) -> None:
        """Test a root's own condition is recorded at its installed path."""
        graph = LicenseGraph(
            targets=[
                _target(
                    "bin1",
                    TargetKind.BINARY,
                    categories=[Category.FIRST_PARTY],
                    install_path="system/bin/bin1",
                )
            ]
        )

        assert _triples(graph, ["bin1"]) == [
            ("first_party", "Android", "out/system/bin/bin1")
        ]

    def test_static_and_dynamic_conditions_surface_at_leaf(self) -> None:
        """Test linked dependency conditions attach to the leaf's path."""
        graph = LicenseGraph(
            targets=[
                _target("bin1", TargetKind.BINARY, categories=[Category.FIRST_PARTY]),
                _target("liba.so", package="Device", categories=[Category.NOTICE]),
                _target("libc.so", package="External", categories=[Category.NOTICE]),
            ],
            edges=[
                _edge("bin1", "liba.so", LinkageKind.STATIC),
                _edge("bin1", "libc.so", LinkageKind.DYNAMIC),
            ],
        )

        assert _triples(graph, ["bin1"]) == [
            ("first_party", "Android", "out/bin1"),
            ("notice", "Device", "out/bin1"),
            ("notice", "External", "out/bin1"),
        ]

    def test_transitive_static_chain_propagates(self) -> None:
        """Test conditions propagate through chains of linked libraries."""
        graph = LicenseGraph(
            targets=[
                _target("bin1", TargetKind.BINARY),
                _target("liba.a", categories=[Category.NOTICE]),
                _target("libz.a", package="External", categories=[Category.RECIPROCAL]),
            ],
            edges=[
                _edge("bin1", "liba.a", LinkageKind.STATIC),
                _edge("liba.a", "libz.a", LinkageKind.RUNTIME),
            ],
        )

        assert _triples(graph, ["bin1"]) == [
            ("notice", "Android", "out/bin1"),
            ("reciprocal", "External", "out/bin1"),
        ]

    def test_toolchain_dependency_never_propagates(self) -> None:
        """Test a root reaching a restricted tool only via toolchain."""
        graph = LicenseGraph(
            targets=[
                _target("bin1", TargetKind.BINARY, categories=[Category.FIRST_PARTY]),
                _target("compiler", TargetKind.BINARY, categories=[Category.RESTRICTED]),
            ],
            edges=[_edge("bin1", "compiler", LinkageKind.TOOLCHAIN)],
        )

        triples = _triples(graph, ["bin1"])

        assert all(category != "restricted" for category, _, _ in triples)

    def test_toolchain_member_of_container_not_shipped(self) -> None:
        """Test a container does not descend into toolchain dependencies."""
        graph = LicenseGraph(
            targets=[
                _target("x.apex", TargetKind.APEX, categories=[Category.FIRST_PARTY]),
                _target("tool", TargetKind.BINARY, categories=[Category.RESTRICTED]),
            ],
            edges=[_edge("x.apex", "tool", LinkageKind.TOOLCHAIN)],
        )

        assert _triples(graph, ["x.apex"]) == [("first_party", "Android", "out/x.apex")]

    def test_container_members_get_nested_paths(self) -> None:
        """Test container members are recorded below the container path."""
        graph = LicenseGraph(
            targets=[
                _target("x.apex", TargetKind.APEX, categories=[Category.FIRST_PARTY]),
                _target("bin1", TargetKind.BINARY, categories=[Category.FIRST_PARTY]),
            ],
            edges=[_edge("x.apex", "bin1", LinkageKind.CONTAINER, "bin/bin1")],
        )

        assert _triples(graph, ["x.apex"]) == [
            ("first_party", "Android", "out/x.apex"),
            ("first_party", "Android", "out/x.apex/bin/bin1"),
        ]

    def test_nested_containers_concatenate_segments(self) -> None:
        """Test a container inside a container nests its install segments."""
        graph = LicenseGraph(
            targets=[
                _target("outer.zip", TargetKind.CONTAINER),
                _target("inner.apex", TargetKind.APEX),
                _target("lib1.so", categories=[Category.NOTICE]),
            ],
            edges=[
                _edge("outer.zip", "inner.apex", LinkageKind.CONTAINER, "apex/inner.apex"),
                _edge("inner.apex", "lib1.so", LinkageKind.CONTAINER, "lib/lib1.so"),
            ],
        )

        assert _triples(graph, ["outer.zip"]) == [
            ("notice", "Android", "out/outer.zip/apex/inner.apex/lib/lib1.so")
        ]

    def test_inherited_category_recorded_separately(self) -> None:
        """Test a dependency's category is not merged into the dependent's."""
        graph = LicenseGraph(
            targets=[
                _target("bin1", TargetKind.BINARY, categories=[Category.FIRST_PARTY]),
                _target("libr.so", categories=[Category.RESTRICTED]),
            ],
            edges=[_edge("bin1", "libr.so", LinkageKind.DYNAMIC)],
        )

        assert _triples(graph, ["bin1"]) == [
            ("first_party", "Android", "out/bin1"),
            ("restricted", "Android", "out/bin1"),
        ]

    def test_policy_limits_dynamic_propagation(self) -> None:
        """Test a policy propagating only restricted across dynamic links."""
        graph = LicenseGraph(
            targets=[
                _target("bin2", TargetKind.BINARY),
                _target("libb.so", categories=[Category.RESTRICTED]),
                _target("libd.so", package="External", categories=[Category.NOTICE]),
            ],
            edges=[
                _edge("bin2", "libb.so", LinkageKind.DYNAMIC),
                _edge("bin2", "libd.so", LinkageKind.DYNAMIC),
            ],
        )
        policy = LinkagePolicy.with_overrides(
            {LinkageKind.DYNAMIC: [Category.RESTRICTED]}
        )

        resolutions = ConditionResolver(graph, policy=policy).resolve(["bin2"])

        assert [(r.category, r.library) for r in resolutions] == [
            (Category.RESTRICTED, "Android")
        ]

    def test_category_must_propagate_along_whole_chain(self) -> None:
        """Test a category blocked on any edge of a chain does not arrive."""
        graph = LicenseGraph(
            targets=[
                _target("bin1", TargetKind.BINARY),
                _target("liba.so"),
                _target("libn.so", categories=[Category.NOTICE, Category.RESTRICTED]),
            ],
            edges=[
                _edge("bin1", "liba.so", LinkageKind.DYNAMIC),
                _edge("liba.so", "libn.so", LinkageKind.STATIC),
            ],
        )
        policy = LinkagePolicy.with_overrides(
            {LinkageKind.DYNAMIC: [Category.RESTRICTED]}
        )

        resolutions = ConditionResolver(graph, policy=policy).resolve(["bin1"])

        assert [r.category for r in resolutions] == [Category.RESTRICTED]

    def test_policy_applies_to_container_members(self) -> None:
        """Test a container policy with no categories ships no member obligations."""
        graph = LicenseGraph(
            targets=[
                _target("a.apex", TargetKind.APEX, categories=[Category.FIRST_PARTY]),
                _target("liba.so", categories=[Category.RESTRICTED]),
            ],
            edges=[_edge("a.apex", "liba.so", LinkageKind.CONTAINER, "lib/liba.so")],
        )
        policy = LinkagePolicy.with_overrides({LinkageKind.CONTAINER: []})

        resolutions = ConditionResolver(graph, policy=policy).resolve(["a.apex"])

        assert [(r.category, r.install_path) for r in resolutions] == [
            (Category.FIRST_PARTY, "out/a.apex")
        ]

    def test_container_policy_narrows_member_categories(self) -> None:
        """Test members keep only the categories their container edge carries."""
        graph = LicenseGraph(
            targets=[
                _target("a.apex", TargetKind.APEX),
                _target(
                    "bin1",
                    TargetKind.BINARY,
                    categories=[Category.FIRST_PARTY, Category.RESTRICTED],
                ),
                _target("libn.so", categories=[Category.NOTICE, Category.RESTRICTED]),
            ],
            edges=[
                _edge("a.apex", "bin1", LinkageKind.CONTAINER, "bin/bin1"),
                _edge("bin1", "libn.so", LinkageKind.STATIC),
            ],
        )
        policy = LinkagePolicy.with_overrides(
            {LinkageKind.CONTAINER: [Category.RESTRICTED]}
        )

        resolutions = ConditionResolver(graph, policy=policy).resolve(["a.apex"])

        assert [(r.category, r.origin) for r in resolutions] == [
            (Category.RESTRICTED, "bin1"),
            (Category.RESTRICTED, "libn.so"),
        ]

    def test_dynamic_policy_applies_inside_container(self) -> None:
        """Test dynamic edges from a container follow the dynamic policy."""
        graph = LicenseGraph(
            targets=[
                _target("a.apex", TargetKind.APEX),
                _target("libd.so", categories=[Category.NOTICE]),
            ],
            edges=[_edge("a.apex", "libd.so", LinkageKind.DYNAMIC, "lib/libd.so")],
        )
        policy = LinkagePolicy.with_overrides({LinkageKind.DYNAMIC: []})

        assert ConditionResolver(graph, policy=policy).resolve(["a.apex"]) == []

    def test_install_name_ends_installed_path(self) -> None:
        """Test an explicit install name replaces the last install segment."""
        graph = LicenseGraph(
            targets=[
                _target("a.apex", TargetKind.APEX, install_path="system/apex/a.apex"),
                Target(
                    id="liba.so",
                    kind=TargetKind.LIBRARY,
                    install_path="system/lib/liba.so",
                    name="libreal.so",
                    package="Android",
                    conditions=[LicenseCondition(category=Category.RESTRICTED)],
                ),
            ],
            edges=[_edge("a.apex", "liba.so", LinkageKind.CONTAINER, "lib/liba.so")],
        )

        assert _triples(graph, ["a.apex"]) == [
            ("restricted", "Android", "out/system/apex/a.apex/lib/libreal.so")
        ]

    def test_root_install_name_ends_installed_path(self) -> None:
        """Test a root's install name is used for its own installed path."""
        graph = LicenseGraph(
            targets=[
                Target(
                    id="bin1",
                    kind=TargetKind.BINARY,
                    install_path="system/bin/bin1",
                    name="tool",
                    package="Android",
                    conditions=[LicenseCondition(category=Category.NOTICE)],
                )
            ]
        )

        assert _triples(graph, ["bin1"]) == [("notice", "Android", "out/system/bin/tool")]


class TestConditionResolverDeduplication:
    """Tests for duplicate suppression and multiplicity."""

    def test_identical_triples_suppressed(self) -> None:
        """Test the same obligation reached twice is recorded once."""
        graph = LicenseGraph(
            targets=[
                _target("bin1", TargetKind.BINARY),
                _target("liba.so"),
                _target("libb.so"),
                _target("libz.a", package="External", categories=[Category.NOTICE]),
            ],
            edges=[
                _edge("bin1", "liba.so", LinkageKind.DYNAMIC),
                _edge("bin1", "libb.so", LinkageKind.DYNAMIC),
                _edge("liba.so", "libz.a", LinkageKind.STATIC),
                _edge("libb.so", "libz.a", LinkageKind.STATIC),
            ],
        )

        assert _triples(graph, ["bin1"]) == [("notice", "External", "out/bin1")]

    def test_same_artifact_at_two_paths_retained(self) -> None:
        """Test one library in two containers yields two installed paths."""
        graph = LicenseGraph(
            targets=[
                _target("x.apex", TargetKind.APEX),
                _target("lib1.so", categories=[Category.RESTRICTED]),
            ],
            edges=[
                _edge("x.apex", "lib1.so", LinkageKind.CONTAINER, "lib/lib1.so"),
                _edge("x.apex", "lib1.so", LinkageKind.CONTAINER, "lib64/lib1.so"),
            ],
        )

        assert _triples(graph, ["x.apex"]) == [
            ("restricted", "Android", "out/x.apex/lib/lib1.so"),
            ("restricted", "Android", "out/x.apex/lib64/lib1.so"),
        ]

    def test_distinct_license_texts_retained(self) -> None:
        """Test two conditions of one category with different texts both kept."""
        graph = LicenseGraph(
            targets=[
                Target(
                    id="bin1",
                    kind=TargetKind.BINARY,
                    install_path="bin1",
                    package="Android",
                    conditions=[
                        LicenseCondition(category=Category.NOTICE, license_text="MIT"),
                        LicenseCondition(category=Category.NOTICE, license_text="BSD"),
                    ],
                )
            ]
        )

        resolutions = ConditionResolver(graph).resolve(["bin1"])

        assert [r.license_text for r in resolutions] == ["MIT", "BSD"]

    def test_shared_library_reported_once_per_root_path(self) -> None:
        """Test two roots sharing a library are resolved as one union."""
        graph = LicenseGraph(
            targets=[
                _target("a.apex", TargetKind.APEX),
                _target("b.apex", TargetKind.APEX),
                _target("libshared.so", package="Device", categories=[Category.RESTRICTED]),
            ],
            edges=[
                _edge("a.apex", "libshared.so", LinkageKind.CONTAINER, "lib/libshared.so"),
                _edge("b.apex", "libshared.so", LinkageKind.CONTAINER, "lib/libshared.so"),
            ],
        )

        triples = _triples(graph, ["a.apex", "b.apex", "a.apex"])

        assert triples == [
            ("restricted", "Device", "out/a.apex/lib/libshared.so"),
            ("restricted", "Device", "out/b.apex/lib/libshared.so"),
        ]


class TestConditionResolverCycles:
    """Tests for cycle breaking."""

    def test_container_cycle_terminates(self) -> None:
        """Test containers that contain each other are walked once per path."""
        graph = LicenseGraph(
            targets=[
                _target("a.zip", TargetKind.CONTAINER, categories=[Category.NOTICE]),
                _target("b.zip", TargetKind.CONTAINER, categories=[Category.NOTICE]),
            ],
            edges=[
                _edge("a.zip", "b.zip", LinkageKind.CONTAINER),
                _edge("b.zip", "a.zip", LinkageKind.CONTAINER),
            ],
        )

        assert _triples(graph, ["a.zip"]) == [
            ("notice", "Android", "out/a.zip"),
            ("notice", "Android", "out/a.zip/b.zip"),
        ]

    def test_link_cycle_terminates(self) -> None:
        """Test mutually linked libraries resolve without looping."""
        graph = LicenseGraph(
            targets=[
                _target("bin1", TargetKind.BINARY),
                _target("liba.so", categories=[Category.NOTICE]),
                _target("libb.so", package="External", categories=[Category.RECIPROCAL]),
            ],
            edges=[
                _edge("bin1", "liba.so", LinkageKind.DYNAMIC),
                _edge("liba.so", "libb.so", LinkageKind.DYNAMIC),
                _edge("libb.so", "liba.so", LinkageKind.DYNAMIC),
                _edge("libb.so", "bin1", LinkageKind.DYNAMIC),
            ],
        )

        assert _triples(graph, ["bin1"]) == [
            ("notice", "Android", "out/bin1"),
            ("reciprocal", "External", "out/bin1"),
        ]


class TestConditionResolverPaths:
    """Tests for installed path options."""

    def test_custom_output_root(self) -> None:
        """Test resolutions use the path builder's output root."""
        graph = LicenseGraph(
            targets=[
                _target(
                    "bin1",
                    TargetKind.BINARY,
                    categories=[Category.NOTICE],
                    install_path="system/bin/bin1",
                )
            ]
        )
        builder = InstallPathBuilder(output_root="out/target/product/fictional")

        resolutions = ConditionResolver(graph, path_builder=builder).resolve(["bin1"])

        assert resolutions[0].install_path == (
            "out/target/product/fictional/system/bin/bin1"
        )

    def test_resolution_records_origin_and_shipped_target(self) -> None:
        """Test resolutions name both the declaring and installed targets."""
        graph = LicenseGraph(
            targets=[
                _target("bin1", TargetKind.BINARY),
                _target("liba.so", package="Device", categories=[Category.NOTICE]),
            ],
            edges=[_edge("bin1", "liba.so", LinkageKind.STATIC)],
        )

        resolution = ConditionResolver(graph).resolve(["bin1"])[0]

        assert resolution.origin == "liba.so"
        assert resolution.shipped_by == "bin1"
