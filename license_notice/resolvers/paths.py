"""Installed path construction for license-notice."""
from __future__ import annotations

from typing import Optional

from license_notice.constants import DEFAULT_OUTPUT_ROOT
from license_notice.models.graph import DependencyEdge, LicenseGraph, Target


class InstallPathBuilder:
    """Builds installed path strings from traversal paths.

    An installed path is the build-output root followed by the install
    segments of every artifact from the root down to the obligated one.
    """

    def __init__(
        self,
        output_root: Optional[str] = None,
        strip_prefix: Optional[str] = None,
    ) -> None:
        """Initialize builder.

        Args:
            output_root: Build-output root; defaults to "out".
            strip_prefix: Optional prefix removed from built paths.
        """
        self._output_root = (output_root or DEFAULT_OUTPUT_ROOT).rstrip("/")
        self._strip_prefix = strip_prefix

    @property
    def output_root(self) -> str:
        """Build-output root every installed path starts with."""
        return self._output_root

    def build(self, segments: list[str]) -> str:
        """Join the output root and install segments.

        Args:
            segments: Install segments from the root artifact down.

        Returns:
            Installed path string, e.g. "out/system/apex/x.apex/bin/bin1".
        """
        parts = [self._output_root]
        for segment in segments:
            parts.extend(piece for piece in segment.split("/") if piece)
        path = "/".join(parts)
        if self._strip_prefix and path.startswith(self._strip_prefix):
            path = path[len(self._strip_prefix):]
        return path

    @staticmethod
    def root_segment(root: Target) -> str:
        """Install segment of a root, ending in its install name."""
        return _with_name(root.install_path, root.name)

    @staticmethod
    def segment_for(edge: DependencyEdge, dependency: Target) -> str:
        """Install segment a dependency contributes inside its container.

        The edge's install path places the dependency inside the container
        when given; the dependency's own install path is used otherwise.
        Either way the segment ends in the dependency's install name.
        """
        return _with_name(edge.install_path or dependency.install_path, dependency.name)

    def segments_for(
        self, graph: LicenseGraph, root: Target, edges: list[DependencyEdge]
    ) -> list[str]:
        """Derive install segments for a root and the edges followed from it.

        Args:
            graph: Graph the edges belong to.
            root: Root target the traversal started from.
            edges: Edges followed, in order, from the root.

        Returns:
            List of install segments, root first.
        """
        segments = [self.root_segment(root)]
        for edge in edges:
            segments.append(self.segment_for(edge, graph.target(edge.dependency)))
        return segments

    def build_for(
        self, graph: LicenseGraph, root: Target, edges: list[DependencyEdge]
    ) -> str:
        """Build the installed path for a root and the edges followed from it."""
        return self.build(self.segments_for(graph, root, edges))


def _with_name(install_path: str, name: str) -> str:
    directory, _, _ = install_path.rstrip("/").rpartition("/")
    return f"{directory}/{name}" if directory else name
