"""Main CLI entry point for the post-review command.

This module provides the Typer application that serves as the entry point
for the post-review command-line tool. Each subcommand reads HTML from a
file (or '-' for stdin), applies one transformation and writes the result
to --output or stdout. Status messages go to stderr.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from src.content_review.change_detector import ChangeDetector
from src.content_review.list_normalizer import StructuralNormalizer
from src.settings.config_loader import ConfigLoader
from src.settings.errors import FilesystemError, ReviewError
from src.settings.models import ReviewConfig
from src.cli.errors import InputError
from src.cli.models import ExitCode, TransformSummary
from src.cli.output import OutputHandler

__version__ = "0.1.0"

app = typer.Typer(
    name="post-review",
    help="""Highlight rewritten content and repair list markup in blog post HTML.

QUICK START:
  post-review diff original.html revised.html -o review.html   # Highlight changes
  post-review normalize post.html -o fixed.html                # Repair lists
  post-review strip review.html -o clean.html                  # Remove highlights
  post-review prepare review.html -o publish.html              # Strip + normalize""",
    add_completion=False,
    rich_markup_mode=None,  # Disable Rich markup to avoid compatibility issues
    no_args_is_help=True,
)

# Module logger
logger = logging.getLogger(__name__)

STDIN_PATH = "-"


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)
    # Repeated invocations in one process must not stack handlers
    app_logger.handlers.clear()

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"post-review_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _read_input(path: str) -> str:
    """Read HTML from a file path, or from stdin when path is '-'.

    Raises:
        FilesystemError: If the file cannot be read
    """
    if path == STDIN_PATH:
        return sys.stdin.read()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except FileNotFoundError:
        raise FilesystemError(path, 'read', 'File not found')
    except PermissionError:
        raise FilesystemError(path, 'read', 'Permission denied')
    except UnicodeDecodeError:
        raise FilesystemError(path, 'read', 'File is not valid UTF-8')
    except OSError as e:
        raise FilesystemError(path, 'read', str(e))


def _write_output(html: str, path: Optional[str]) -> None:
    """Write HTML to a file path, or to stdout when no path is given.

    Raises:
        FilesystemError: If the file cannot be written
    """
    if path is None or path == STDIN_PATH:
        typer.echo(html)
        return
    try:
        parent = Path(path).parent
        parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(html)
    except PermissionError:
        raise FilesystemError(path, 'write', 'Permission denied')
    except OSError as e:
        raise FilesystemError(path, 'write', str(e))
    logger.info(f"Wrote {len(html)} characters to {path}")


def _setup(verbosity: int, no_color: bool, logdir: Optional[str],
           config_path: Optional[str]) -> tuple:
    """Configure logging and output, then load configuration.

    Returns:
        Tuple of (OutputHandler, ReviewConfig)
    """
    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)
    try:
        config = ConfigLoader.load_or_default(config_path)
    except ReviewError as e:
        logger.error(f"Failed to load config: {e}")
        output.error(f"Failed to load config: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    return output, config


def _fail(output: OutputHandler, error: Exception) -> None:
    """Report an error and exit with GENERAL_ERROR."""
    if isinstance(error, ReviewError):
        logger.error(str(error))
        output.error(str(error))
    else:
        logger.exception("Unexpected error")
        output.error(f"Unexpected error: {error}")
    raise typer.Exit(ExitCode.GENERAL_ERROR)


def _transform(
    source: str,
    destination: Optional[str],
    config: ReviewConfig,
    strip: bool,
    normalize: bool,
) -> TransformSummary:
    """Read, optionally strip highlights and normalize, then write."""
    html = _read_input(source)
    result = html
    removed = 0

    if strip:
        highlight = config.detector.highlight
        removed = highlight.count(result)
        result = highlight.strip(result)

    if normalize:
        result = StructuralNormalizer(config.normalizer).normalize(result)

    _write_output(result, destination)
    return TransformSummary(
        source=source,
        destination=destination,
        input_length=len(html),
        output_length=len(result),
        highlights_removed=removed,
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"post-review version {__version__}")
        raise typer.Exit()


# Shared option declarations
OUTPUT_OPTION = typer.Option(
    None, "--output", "-o", help="Output file (default: stdout)", metavar="FILE"
)
CONFIG_OPTION = typer.Option(
    None, "--config", "-c",
    help=f"YAML config file (default: {ConfigLoader.DEFAULT_CONFIG_FILE} if present)",
    metavar="FILE",
)
VERBOSITY_OPTION = typer.Option(
    0, "--verbosity", "-v", help="Verbosity level: 0=summary, 1=info, 2=debug"
)
NO_COLOR_OPTION = typer.Option(False, "--no-color", help="Disable colored output")
LOGDIR_OPTION = typer.Option(
    None, "--logdir", help="Directory for log files (creates timestamped log file)"
)


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Highlight rewritten content and repair list markup in blog post HTML."""


@app.command("diff")
def diff_command(
    original: str = typer.Argument(..., help="Original HTML file ('-' for stdin)"),
    revised: str = typer.Argument(..., help="Revised HTML file ('-' for stdin)"),
    output_path: Optional[str] = OUTPUT_OPTION,
    config_path: Optional[str] = CONFIG_OPTION,
    fail_on_change: bool = typer.Option(
        False,
        "--fail-on-change",
        help="Exit with code 2 when any block changed",
    ),
    verbosity: int = VERBOSITY_OPTION,
    no_color: bool = NO_COLOR_OPTION,
    logdir: Optional[str] = LOGDIR_OPTION,
) -> None:
    """Highlight blocks of REVISED whose content differs from ORIGINAL.

    \b
    Tables, embeds, images and widgets are passed through untouched.
    Whitespace, punctuation, case and light copy-editing are not changes.
    """
    output, config = _setup(verbosity, no_color, logdir, config_path)

    try:
        if original == STDIN_PATH and revised == STDIN_PATH:
            raise InputError("only one input can be read from stdin", argument="revised")

        original_html = _read_input(original)
        revised_html = _read_input(revised)
        output.info(f"Comparing {original} -> {revised}")

        detector = ChangeDetector(config.detector)
        with output.spinner("Comparing content blocks..."):
            report = detector.detect(original_html, revised_html)

        _write_output(report.html, output_path)
        output.print_change_summary(report)

    except typer.Exit:
        raise
    except Exception as e:
        _fail(output, e)

    if fail_on_change and report.has_changes:
        raise typer.Exit(ExitCode.CHANGES_DETECTED)
    raise typer.Exit(ExitCode.SUCCESS)


@app.command("normalize")
def normalize_command(
    source: str = typer.Argument(..., help="HTML file to repair ('-' for stdin)"),
    output_path: Optional[str] = OUTPUT_OPTION,
    config_path: Optional[str] = CONFIG_OPTION,
    verbosity: int = VERBOSITY_OPTION,
    no_color: bool = NO_COLOR_OPTION,
    logdir: Optional[str] = LOGDIR_OPTION,
) -> None:
    """Repair list markup: orphaned items, nested lists, missing roles."""
    output, config = _setup(verbosity, no_color, logdir, config_path)
    try:
        summary = _transform(source, output_path, config, strip=False, normalize=True)
        output.print_transform_summary("Normalized", summary)
    except typer.Exit:
        raise
    except Exception as e:
        _fail(output, e)
    raise typer.Exit(ExitCode.SUCCESS)


@app.command("strip")
def strip_command(
    source: str = typer.Argument(..., help="Reviewed HTML file ('-' for stdin)"),
    output_path: Optional[str] = OUTPUT_OPTION,
    config_path: Optional[str] = CONFIG_OPTION,
    verbosity: int = VERBOSITY_OPTION,
    no_color: bool = NO_COLOR_OPTION,
    logdir: Optional[str] = LOGDIR_OPTION,
) -> None:
    """Remove highlight containers added by 'diff', keeping their content."""
    output, config = _setup(verbosity, no_color, logdir, config_path)
    try:
        summary = _transform(source, output_path, config, strip=True, normalize=False)
        output.print_transform_summary("Stripped", summary)
    except typer.Exit:
        raise
    except Exception as e:
        _fail(output, e)
    raise typer.Exit(ExitCode.SUCCESS)


@app.command("prepare")
def prepare_command(
    source: str = typer.Argument(..., help="Reviewed HTML file ('-' for stdin)"),
    output_path: Optional[str] = OUTPUT_OPTION,
    config_path: Optional[str] = CONFIG_OPTION,
    verbosity: int = VERBOSITY_OPTION,
    no_color: bool = NO_COLOR_OPTION,
    logdir: Optional[str] = LOGDIR_OPTION,
) -> None:
    """Strip highlights and repair list markup, ready for publishing."""
    output, config = _setup(verbosity, no_color, logdir, config_path)
    try:
        summary = _transform(source, output_path, config, strip=True, normalize=True)
        output.print_transform_summary("Prepared", summary)
    except typer.Exit:
        raise
    except Exception as e:
        _fail(output, e)
    raise typer.Exit(ExitCode.SUCCESS)


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
