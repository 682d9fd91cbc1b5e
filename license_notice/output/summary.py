"""Terminal summary formatter using Rich."""
from typing import Optional

from rich.console import Console
from rich.table import Table

from license_notice.models.graph import Category
from license_notice.models.resolution import NoticeSection


class SummaryFormatter:
    """Format notice sections as a Rich summary table.

    One row per section, in report order, listing the category, the
    libraries with blocks in the section and the installed path count.
    """

    # Color mapping for obligation categories
    CATEGORY_COLORS = {
        Category.FIRST_PARTY: "green",
        Category.NOTICE: "green",
        Category.RECIPROCAL: "yellow",
        Category.RESTRICTED: "red",
        Category.PROPRIETARY: "magenta",
    }

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize the formatter with a Rich console.

        Args:
            console: Optional Rich Console instance. If not provided,
                a new Console will be created.
        """
        self._console = console if console is not None else Console()

    def format_sections(self, sections: list[NoticeSection]) -> None:
        """Format and display a summary of notice sections.

        Args:
            sections: Ordered notice sections.
        """
        if not sections:
            self._console.print("[yellow]No license obligations found[/yellow]")
            return

        table = Table(title="License Notice Sections")
        table.add_column("#", justify="right")
        table.add_column("Category", no_wrap=True)
        table.add_column("License Text", style="dim")
        table.add_column("Libraries", style="cyan")
        table.add_column("Installed Paths", justify="right")

        for index, section in enumerate(sections, start=1):
            color = self.CATEGORY_COLORS.get(section.category, "white")
            table.add_row(
                str(index),
                f"[{color}]{section.category.label}[/{color}]",
                section.license_text or "-",
                ", ".join(section.libraries),
                str(section.path_count),
            )

        self._console.print(table)

        libraries = {library for section in sections for library in section.libraries}
        self._console.print(f"\n[bold]Sections:[/bold] {len(sections)}")
        self._console.print(f"[bold]Libraries:[/bold] {len(libraries)}")
