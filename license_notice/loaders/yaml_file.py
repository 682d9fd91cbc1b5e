"""Validated YAML document loading shared by configuration and graphs."""
from __future__ import annotations

from pathlib import Path
from typing import TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from license_notice.exceptions import LicenseNoticeError

ModelT = TypeVar("ModelT", bound=BaseModel)


def load_yaml_model(
    path: Path,
    model: type[ModelT],
    error_cls: type[LicenseNoticeError],
    what: str,
) -> ModelT:
    """Load a YAML (or JSON) mapping from a file into a pydantic model.

    An empty document, or one holding only comments, yields the model's
    defaults.

    Args:
        path: File to read.
        model: Model class the mapping is validated against.
        error_cls: Exception raised for every failure.
        what: Human readable name of the document, used in messages.

    Returns:
        Validated model instance.

    Raises:
        LicenseNoticeError: An instance of error_cls, if the file cannot be
            read, has invalid syntax, is not a mapping, or fails validation.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise error_cls(f"Cannot read {what} '{path}': {e}") from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise error_cls(f"Invalid YAML syntax in {what} '{path}': {e}") from e

    if data is None:
        return model()

    if not isinstance(data, dict):
        raise error_cls(
            f"Invalid {what} in '{path}': "
            f"expected a mapping at root level, got {type(data).__name__}"
        )

    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise error_cls(
            f"Invalid {what} in '{path}': {format_validation_errors(e)}"
        ) from e


def format_validation_errors(error: ValidationError) -> str:
    """Format Pydantic validation errors as "loc: msg" pairs.

    Args:
        error: The Pydantic ValidationError.

    Returns:
        Messages joined with "; ".
    """
    messages: list[str] = []
    for err in error.errors():
        loc = ".".join(str(x) for x in err["loc"]) if err["loc"] else "root"
        messages.append(f"{loc}: {err['msg']}")
    return "; ".join(messages)
