"""License text loading for license-notice."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from license_notice.exceptions import LicenseTextError
from license_notice.models.resolution import NoticeSection


def load_license_texts(
    sections: list[NoticeSection],
    base_dir: Optional[Path] = None,
) -> dict[str, str]:
    """Read the license text bodies referenced by notice sections.

    Each referenced text is read once, however many sections use it.

    Args:
        sections: Notice sections whose license texts to read.
        base_dir: Directory relative identifiers are resolved against.
            Defaults to the current working directory.

    Returns:
        Dict mapping license text identifier to its contents.

    Raises:
        LicenseTextError: If a referenced text cannot be read.
    """
    root = base_dir or Path.cwd()
    texts: dict[str, str] = {}
    for section in sections:
        name = section.license_text
        if not name or name in texts:
            continue
        path = root / name
        try:
            texts[name] = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise LicenseTextError(f"Cannot read license text '{path}': {e}") from e
    return texts
