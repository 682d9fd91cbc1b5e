"""Notice generation: resolution, grouping and rendering in one pass."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from license_notice.analysis.grouping import NoticeGrouper
from license_notice.loaders.texts import load_license_texts
from license_notice.models.config import LinkagePolicy, NoticeConfig
from license_notice.models.graph import LicenseGraph
from license_notice.models.resolution import NoticeSection, Resolution
from license_notice.output.text import TextNoticeFormatter
from license_notice.resolvers.conditions import ConditionResolver
from license_notice.resolvers.paths import InstallPathBuilder


def resolve_conditions(
    graph: LicenseGraph,
    roots: list[str],
    config: Optional[NoticeConfig] = None,
) -> list[Resolution]:
    """Resolve obligations for every shipped target reachable from the roots.

    Args:
        graph: License graph.
        roots: Root target identifiers.
        config: Optional configuration (output root, linkage policy).

    Returns:
        Resolutions in traversal-discovery order.
    """
    config = config or NoticeConfig()
    resolver = ConditionResolver(
        graph,
        policy=LinkagePolicy.with_overrides(config.linkage_policy),
        path_builder=InstallPathBuilder(
            output_root=config.output_root,
            strip_prefix=config.strip_prefix,
        ),
    )
    return resolver.resolve(roots)


def generate_sections(
    graph: LicenseGraph,
    roots: list[str],
    config: Optional[NoticeConfig] = None,
) -> list[NoticeSection]:
    """Resolve and group obligations into ordered notice sections.

    Args:
        graph: License graph.
        roots: Root target identifiers.
        config: Optional configuration.

    Returns:
        Ordered notice sections; empty if no conditions apply.
    """
    config = config or NoticeConfig()
    resolutions = resolve_conditions(graph, roots, config)
    return NoticeGrouper(precedence=config.section_precedence).group(resolutions)


def generate_text_notice(
    graph: LicenseGraph,
    roots: list[str],
    config: Optional[NoticeConfig] = None,
    include_texts: bool = False,
) -> str:
    """Generate the text notice for the roots.

    Args:
        graph: License graph.
        roots: Root target identifiers.
        config: Optional configuration.
        include_texts: Read license text bodies (relative to
            config.texts_dir) and append them after each marker.

    Returns:
        The rendered text notice.
    """
    config = config or NoticeConfig()
    sections = generate_sections(graph, roots, config)

    texts: dict[str, str] = {}
    if include_texts:
        base_dir = Path(config.texts_dir) if config.texts_dir else None
        texts = load_license_texts(sections, base_dir)

    return TextNoticeFormatter(texts=texts, title=config.title).format_sections(
        sections
    )
