"""License condition resolution for license-notice.

Walks the license graph from the requested roots, determines which
targets are shipped, and records every declared condition that applies
to each shipped artifact as a Resolution.
"""
from __future__ import annotations

import logging
from typing import Optional

from license_notice.exceptions import CycleDetected, GraphIncomplete, RootNotFound
from license_notice.models.config import LinkagePolicy
from license_notice.models.graph import Category, DependencyEdge, LicenseGraph, Target
from license_notice.models.resolution import Resolution
from license_notice.resolvers.paths import InstallPathBuilder

logger = logging.getLogger(__name__)


class ConditionResolver:
    """Resolves license obligations for shipped targets.

    Container-like targets are descended into, each member receiving its
    own installed path below the container. Leaf targets are not descended
    into: conditions of everything they link against are recorded at the
    leaf's own installed path, attributed to the dependency's library.
    """

    def __init__(
        self,
        graph: LicenseGraph,
        policy: Optional[LinkagePolicy] = None,
        path_builder: Optional[InstallPathBuilder] = None,
    ) -> None:
        """Initialize resolver.

        Args:
            graph: License graph to resolve against.
            policy: Linkage policy; defaults to LinkagePolicy().
            path_builder: Installed path builder; defaults to "out" root.
        """
        self._graph = graph
        self._policy = policy if policy is not None else LinkagePolicy()
        self._paths = path_builder if path_builder is not None else InstallPathBuilder()

    def resolve(self, roots: list[str]) -> list[Resolution]:
        """Resolve all obligations reachable from the roots.

        Roots share deduplication state, so a target reachable from more
        than one root is reported once per distinct installed path.

        Args:
            roots: Root target identifiers, processed in order.

        Returns:
            Resolutions in traversal-discovery order.

        Raises:
            RootNotFound: If a root is not in the graph.
            GraphIncomplete: If no roots are given or an edge dangles.
            CycleDetected: If traversal fails to terminate.
        """
        if not roots:
            raise GraphIncomplete("at least one root target is required")

        self._graph.check_complete()

        root_targets: list[Target] = []
        for root_id in dict.fromkeys(roots):
            target = self._graph.get(root_id)
            if target is None:
                raise RootNotFound(root_id)
            root_targets.append(target)

        resolutions: list[Resolution] = []
        seen: set[tuple[Category, str, str, str]] = set()
        walked: dict[tuple[str, str], frozenset[Category]] = {}

        for root in root_targets:
            self._walk(
                root,
                root=root,
                trail=[root.id],
                edges=[],
                allowed=frozenset(Category),
                resolutions=resolutions,
                seen=seen,
                walked=walked,
            )

        logger.debug(
            "resolved %d obligations from %d root(s)",
            len(resolutions),
            len(root_targets),
        )
        return resolutions

    def _walk(
        self,
        target: Target,
        root: Target,
        trail: list[str],
        edges: list[DependencyEdge],
        allowed: frozenset[Category],
        resolutions: list[Resolution],
        seen: set[tuple[Category, str, str, str]],
        walked: dict[tuple[str, str], frozenset[Category]],
    ) -> None:
        """Record obligations for a shipped target and descend into containers.

        Args:
            target: Target being visited.
            root: Root target the traversal started from.
            trail: Target ids from the root to this target.
            edges: Edges followed from the root to this target.
            allowed: Categories propagated by every edge followed so far.
            resolutions: List to accumulate resolutions.
            seen: Identities of resolutions already recorded.
            walked: Categories already visited per (target id, installed path).
        """
        if len(trail) > len(self._graph):
            raise CycleDetected(trail)

        install_path = self._paths.build_for(self._graph, root, edges)
        previous = walked.get((target.id, install_path), frozenset())
        if allowed <= previous:
            return
        walked[(target.id, install_path)] = previous | allowed

        self._record(target, target, install_path, allowed, resolutions, seen)

        if not target.is_container:
            for dependency, categories in self._acts_on(target, allowed):
                self._record(
                    dependency, target, install_path, categories, resolutions, seen
                )
            return

        for edge in self._graph.dependencies_of(target.id):
            carried = allowed & self._policy.propagated(edge.linkage)
            if not carried:
                logger.debug(
                    "nothing propagates: %s -> %s (%s)",
                    target.id,
                    edge.dependency,
                    edge.linkage.value,
                )
                continue
            dependency = self._graph.target(edge.dependency)
            if dependency.id in trail:
                logger.debug("cycle broken at %s -> %s", target.id, dependency.id)
                continue
            self._walk(
                dependency,
                root=root,
                trail=trail + [dependency.id],
                edges=edges + [edge],
                allowed=carried,
                resolutions=resolutions,
                seen=seen,
                walked=walked,
            )

    def _acts_on(
        self, target: Target, allowed: frozenset[Category]
    ) -> list[tuple[Target, frozenset[Category]]]:
        """Find dependencies whose conditions apply to a leaf target.

        A category reaches the leaf only if every edge on some chain from
        the leaf to the dependency propagates it.

        Args:
            target: Leaf target.
            allowed: Categories that reached the leaf itself.

        Returns:
            (dependency, propagated categories) pairs in discovery order.
        """
        reached: dict[str, frozenset[Category]] = {}

        def visit(current_id: str, carried_in: frozenset[Category]) -> None:
            for edge in self._graph.dependencies_of(current_id):
                carried = carried_in & self._policy.propagated(edge.linkage)
                if not carried:
                    continue
                dependency_id = edge.dependency
                if dependency_id == target.id:
                    continue
                previous = reached.get(dependency_id, frozenset())
                if carried <= previous:
                    # Nothing new along this chain; also terminates cycles
                    continue
                reached[dependency_id] = previous | carried
                visit(dependency_id, carried)

        visit(target.id, allowed)
        return [
            (self._graph.target(dependency_id), categories)
            for dependency_id, categories in reached.items()
        ]

    @staticmethod
    def _record(
        declaring: Target,
        shipped: Target,
        install_path: str,
        categories: frozenset[Category],
        resolutions: list[Resolution],
        seen: set[tuple[Category, str, str, str]],
    ) -> None:
        """Record the declaring target's conditions at an installed path.

        Args:
            declaring: Target whose conditions apply.
            shipped: Target installed at install_path.
            install_path: Installed path the obligation surfaces at.
            categories: Categories allowed through.
            resolutions: List to accumulate resolutions.
            seen: Identities of resolutions already recorded.
        """
        for condition in declaring.conditions:
            if condition.category not in categories:
                continue
            resolution = Resolution(
                category=condition.category,
                library=declaring.package,
                install_path=install_path,
                license_text=condition.license_text,
                origin=declaring.id,
                shipped_by=shipped.id,
            )
            if resolution.identity in seen:
                continue
            seen.add(resolution.identity)
            resolutions.append(resolution)
