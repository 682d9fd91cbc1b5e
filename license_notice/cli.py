"""CLI entry point for license-notice."""

from __future__ import annotations

import gzip
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from license_notice import __version__
from license_notice.config import NoticeConfig, load_config
from license_notice.constants import EXIT_ERROR, EXIT_SUCCESS
from license_notice.exceptions import ConfigurationError, LicenseNoticeError
from license_notice.generator import generate_sections, generate_text_notice
from license_notice.loaders.graph import load_graph
from license_notice.output.summary import SummaryFormatter

# Module-level console for consistent output
_console = Console()
# Separate console for error output (writes to stderr)
_error_console = Console(stderr=True)


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """License Notice - Generate license notices for built products.

    Walks a license graph of build artifacts from one or more root
    targets and reports which license obligations ship with which
    installed files.

    \b
    Examples:
        license-notice text graph.yaml highest.apex
        license-notice text graph.yaml highest.apex -o NOTICE.txt.gz
        license-notice summary graph.yaml highest.apex
    """
    pass


@main.command()
@click.argument("graph_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("roots", nargs=-1, required=True)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write notice to file instead of stdout (.gz writes gzip).",
)
@click.option(
    "--title",
    default=None,
    help="Title line printed before the first section.",
)
@click.option(
    "--output-root",
    default=None,
    help="Build-output root prefixed to installed paths (default: out).",
)
@click.option(
    "--strip-prefix",
    default=None,
    help="Prefix to remove from installed paths.",
)
@click.option(
    "--texts-dir",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Directory to read license texts from; appends them to the notice.",
)
@click.option(
    "--verbose",
    "-v",
    "verbose_flag",
    is_flag=True,
    default=False,
    help="Log traversal details to stderr.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to configuration file.",
)
def text(
    graph_path: str,
    roots: tuple[str, ...],
    output_path: str | None,
    title: str | None,
    output_root: str | None,
    strip_prefix: str | None,
    texts_dir: str | None,
    verbose_flag: bool,
    config_path: str | None,
) -> None:
    """Generate a text notice for ROOTS in the license graph GRAPH_PATH.

    \b
    Examples:
        license-notice text graph.yaml highest.apex
        license-notice text graph.yaml bin1 bin2 --title "My Product"
        license-notice text graph.yaml highest.apex --texts-dir licenses/
        license-notice text graph.yaml highest.apex --output NOTICE.txt
    """
    _configure_logging(verbose_flag)

    try:
        config = _merge_options(
            load_config(config_path),
            title=title,
            output_root=output_root,
            strip_prefix=strip_prefix,
            texts_dir=texts_dir,
        )
        graph = load_graph(Path(graph_path))
        content = generate_text_notice(
            graph,
            list(roots),
            config,
            include_texts=config.texts_dir is not None,
        )

        if output_path:
            _write_output_to_file(content, output_path)
        else:
            click.echo(content, nl=False)
        sys.exit(EXIT_SUCCESS)

    except LicenseNoticeError as e:
        _display_error(e)
        sys.exit(EXIT_ERROR)


@main.command()
@click.argument("graph_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("roots", nargs=-1, required=True)
@click.option(
    "--verbose",
    "-v",
    "verbose_flag",
    is_flag=True,
    default=False,
    help="Log traversal details to stderr.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to configuration file.",
)
def summary(
    graph_path: str,
    roots: tuple[str, ...],
    verbose_flag: bool,
    config_path: str | None,
) -> None:
    """Summarize the notice sections for ROOTS in GRAPH_PATH.

    \b
    Examples:
        license-notice summary graph.yaml highest.apex
        license-notice summary graph.yaml highest.apex --config notice.yaml
    """
    _configure_logging(verbose_flag)

    try:
        config = load_config(config_path)
        graph = load_graph(Path(graph_path))
        sections = generate_sections(graph, list(roots), config)
        SummaryFormatter(console=_console).format_sections(sections)
        sys.exit(EXIT_SUCCESS)

    except LicenseNoticeError as e:
        _display_error(e)
        sys.exit(EXIT_ERROR)


def _configure_logging(verbose: bool) -> None:
    """Route log records to stderr through Rich.

    Args:
        verbose: Log at DEBUG level instead of WARNING.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=_error_console, show_path=False)],
        force=True,
    )


def _merge_options(config: NoticeConfig, **options: Optional[Any]) -> NoticeConfig:
    """Overlay command line options on loaded configuration.

    Args:
        config: Configuration loaded from file or defaults.
        **options: Option values; None leaves the configured value.

    Returns:
        NoticeConfig with options applied.
    """
    update = {name: value for name, value in options.items() if value is not None}
    if not update:
        return config
    return config.model_copy(update=update)


def _write_output_to_file(content: str, path: str) -> None:
    """Write notice content to file, gzip-compressed for a .gz path.

    Args:
        content: The notice content to write.
        path: The file path to write to.

    Raises:
        ConfigurationError: If file cannot be written.
    """
    file_path = Path(path)

    try:
        if file_path.exists():
            _error_console.print(
                f"[yellow]Warning: Overwriting existing file: {path}[/yellow]"
            )

        if file_path.suffix == ".gz":
            with gzip.open(file_path, "wt", encoding="utf-8") as f:
                f.write(content)
        else:
            file_path.write_text(content, encoding="utf-8")
        file_path.chmod(0o644)
    except OSError as e:
        raise ConfigurationError(f"Cannot write to file '{path}': {e}") from e

    _error_console.print(f"[green]Notice written to {path}[/green]")


def _display_error(error: LicenseNoticeError) -> None:
    """Display error message to user on stderr.

    Args:
        error: The exception that occurred.
    """
    error_type = type(error).__name__
    message = f"Error: {error_type}: {error}"
    _error_console.print(
        f"[red bold]{escape(message)}[/red bold]", highlight=False, soft_wrap=True
    )


if __name__ == "__main__":
    main()
