"""Resolution and notice section models for license-notice."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, computed_field

from license_notice.models.graph import Category


class Resolution(BaseModel):
    """Evidence that one installed artifact ships with one obligation.

    Ties an installed path, via the originating library, to the category
    (and license text) of a declared condition.
    """

    model_config = {"extra": "forbid", "frozen": True}

    category: Category = Field(description="Obligation category")
    library: str = Field(description="Originating library of the condition")
    install_path: str = Field(description="Installed path of the shipped artifact")
    license_text: Optional[str] = Field(
        default=None,
        description="License text identifier of the condition",
    )
    origin: str = Field(description="Target that declares the condition")
    shipped_by: str = Field(description="Target installed at install_path")

    @property
    def section_key(self) -> tuple[Category, str]:
        """Key of the notice section this resolution belongs to."""
        return (self.category, self.license_text or "")

    @property
    def identity(self) -> tuple[Category, str, str, str]:
        """Deduplication key: section, library and installed path."""
        category, text = self.section_key
        return (category, text, self.library, self.install_path)


class LibraryBlock(BaseModel):
    """One library's installed paths within a notice section."""

    model_config = {"extra": "forbid"}

    library: str = Field(description="Originating library name")
    install_paths: list[str] = Field(
        default_factory=list,
        description="Unique installed paths in first-discovery order",
    )

    def add(self, install_path: str) -> None:
        """Append an installed path unless already listed."""
        if install_path not in self.install_paths:
            self.install_paths.append(install_path)


class NoticeSection(BaseModel):
    """A category-tagged group of library blocks."""

    model_config = {"extra": "forbid"}

    category: Category = Field(description="Obligation category of the section")
    license_text: Optional[str] = Field(
        default=None,
        description="License text identifier shared by the section",
    )
    blocks: list[LibraryBlock] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def libraries(self) -> list[str]:
        """Library names in block order."""
        return [block.library for block in self.blocks]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def path_count(self) -> int:
        """Total installed paths across all blocks."""
        return sum(len(block.install_paths) for block in self.blocks)

    def block_for(self, library: str) -> Optional[LibraryBlock]:
        """Get the block for a library, if the section has one."""
        for block in self.blocks:
            if block.library == library:
                return block
        return None
