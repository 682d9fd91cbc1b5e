"""License graph loading for license-notice."""
from __future__ import annotations

import logging
from pathlib import Path

from license_notice.exceptions import GraphLoadError
from license_notice.loaders.yaml_file import load_yaml_model
from license_notice.models.graph import LicenseGraph

logger = logging.getLogger(__name__)


def load_graph(path: Path) -> LicenseGraph:
    """Load and validate a license graph from a YAML or JSON file.

    An empty file loads as a graph without targets.

    Args:
        path: Path to the graph description.

    Returns:
        Validated LicenseGraph instance.

    Raises:
        GraphLoadError: If the file cannot be read, has invalid syntax,
            or fails Pydantic validation.
    """
    graph = load_yaml_model(path, LicenseGraph, GraphLoadError, "license graph")
    logger.debug(
        "loaded %d targets and %d edges from %s",
        len(graph.targets),
        len(graph.edges),
        path,
    )
    return graph
