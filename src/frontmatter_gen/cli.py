"""CLI commands using Typer."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

if TYPE_CHECKING:
    from frontmatter_gen.context import AppContext

import typer
from rich.console import Console
from rich.logging import RichHandler

from frontmatter_gen import __version__
from frontmatter_gen.config import ParseOptions
from frontmatter_gen.console import TUI
from frontmatter_gen.context import create_context
from frontmatter_gen.errors import FrontmatterError
from frontmatter_gen.filesystem import PathSafetyError
from frontmatter_gen.types import Format, Frontmatter
from frontmatter_gen.validation import check_required_fields

app = typer.Typer(
    name="frontmatter-gen",
    help="Extract, convert and validate document front matter",
    no_args_is_help=True,
)

tui = TUI()

logger = logging.getLogger(__name__)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"frontmatter-gen v{__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route log records to standard error through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                show_time=False,
                show_path=False,
                rich_tracebacks=True,
            )
        ],
        force=True,
    )


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-V", help="Enable debug logging")
    ] = False,
) -> None:
    """Extract, convert and validate document front matter."""
    configure_logging(verbose)


# ============================================================================
# Helpers
# ============================================================================


def _parse_format(name: str) -> Format:
    """Resolve a format name or alias.

    Raises:
        typer.Exit: If the name is not a supported format.
    """
    try:
        return Format.from_name(name)
    except ValueError as e:
        tui.show_error(str(e))
        raise typer.Exit(1) from e


def _parse_required(required_arg: str | None) -> list[str]:
    """Parse comma-separated field names, dropping blanks."""
    if not required_arg:
        return []
    return [name.strip() for name in required_arg.split(",") if name.strip()]


def _build_options(
    base: ParseOptions,
    validate: bool,
    max_depth: int | None,
    max_keys: int | None,
    check_input: bool = False,
) -> ParseOptions:
    """Overlay command-line flags on the context's options."""
    return dataclasses.replace(
        base,
        validate=base.validate and validate,
        max_depth=max_depth if max_depth is not None else base.max_depth,
        max_keys=max_keys if max_keys is not None else base.max_keys,
        check_input=base.check_input or check_input,
    )


def _load(ctx: AppContext, input: Path, options: ParseOptions) -> tuple[Frontmatter, str]:
    """Read a document and extract its frontmatter.

    Raises:
        typer.Exit: If reading, extraction or parsing fails.
    """
    try:
        content = ctx.filesystem.read_text(input)
    except (PathSafetyError, OSError) as e:
        tui.show_error(f"Failed to read input file: {input}: {e}")
        raise typer.Exit(1) from e

    try:
        return ctx.engine.extract(content, options)
    except FrontmatterError as e:
        tui.show_error(f"Failed to extract frontmatter from {input}: {e}")
        raise typer.Exit(1) from e


# ============================================================================
# Commands
# ============================================================================


@app.command("extract")
def extract(
    input: Annotated[Path, typer.Argument(help="Document to read")],
    format: Annotated[
        str,
        typer.Option(
            "--format", "-f", help="Output format: yaml, toml, json (or li, tkv, bof)"
        ),
    ] = "yaml",
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write front matter to this file")
    ] = None,
    no_validate: Annotated[
        bool, typer.Option("--no-validate", help="Skip depth and key limits")
    ] = False,
    max_depth: Annotated[
        int | None, typer.Option("--max-depth", min=1, help="Maximum nesting depth")
    ] = None,
    max_keys: Annotated[
        int | None, typer.Option("--max-keys", min=1, help="Maximum number of top-level keys")
    ] = None,
    _context=None,
) -> None:
    """Extract front matter and re-emit it in another format."""
    ctx = _context or create_context()
    target = _parse_format(format)
    options = _build_options(ctx.options, not no_validate, max_depth, max_keys)

    frontmatter, body = _load(ctx, input, options)

    try:
        rendered = ctx.engine.emit(frontmatter, target)
    except FrontmatterError as e:
        tui.show_error(f"Failed to format frontmatter: {e}")
        raise typer.Exit(1) from e

    if output is None:
        typer.echo(rendered.rstrip("\n"))
        if body:
            typer.echo()
            typer.echo(body.rstrip("\n"))
        return

    try:
        ctx.filesystem.write_text(output, rendered)
    except (PathSafetyError, OSError) as e:
        tui.show_error(f"Failed to write to output file: {output}: {e}")
        raise typer.Exit(1) from e
    logger.info("Front matter extracted to %s", output)
    tui.show_success(f"Extracted {target.value} front matter to {output}")


@app.command("validate")
def validate(
    input: Annotated[Path, typer.Argument(help="Document to read")],
    required: Annotated[
        str | None,
        typer.Option("--required", "-r", help="Required fields (comma-separated)"),
    ] = None,
    strict: Annotated[
        bool, typer.Option("--strict", help="Reject path traversal outside code fences")
    ] = False,
    _context=None,
) -> None:
    """Check that a document's front matter parses and has required fields."""
    ctx = _context or create_context()
    options = _build_options(ctx.options, True, None, None, check_input=strict)

    frontmatter, _ = _load(ctx, input, options)

    errors = check_required_fields(frontmatter, _parse_required(required))
    if errors:
        for error in errors:
            tui.show_error(error)
        raise typer.Exit(1)

    tui.show_frontmatter(frontmatter, title=str(input))
    tui.show_success("Validation successful!")


if __name__ == "__main__":
    app()
