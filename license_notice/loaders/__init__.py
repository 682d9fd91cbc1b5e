"""Graph, license text and YAML document loaders for license-notice."""
from license_notice.loaders.graph import load_graph
from license_notice.loaders.texts import load_license_texts
from license_notice.loaders.yaml_file import format_validation_errors, load_yaml_model

__all__ = [
    "format_validation_errors",
    "load_graph",
    "load_license_texts",
    "load_yaml_model",
]
