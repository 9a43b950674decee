import asyncio
import difflib
import logging
from importlib.metadata import PackageNotFoundError, version
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.text import Text

from styled_fmt.config import load_options
from styled_fmt.core.files import format_paths, resolve_files
from styled_fmt.models import FileResult

console = Console(highlight=False)


def _tool_version() -> str:
    try:
        return version("styled-fmt")
    except PackageNotFoundError:
        return "0.0.0+unknown"


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"styled-fmt {_tool_version()}")
        raise typer.Exit()


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING if verbosity <= 0 else logging.INFO if verbosity == 1 else logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _render_diff(result: FileResult) -> Text:
    text = Text()
    diff = difflib.unified_diff(
        result.original.splitlines(keepends=True),
        result.formatted.splitlines(keepends=True),
        fromfile=f"{result.path} (original)",
        tofile=f"{result.path} (formatted)",
    )
    for line in diff:
        if not line.endswith("\n"):
            line += "\n"
        if line.startswith(("---", "+++")):
            style = "bold"
        elif line.startswith("@@"):
            style = "cyan"
        elif line.startswith("+"):
            style = "green"
        elif line.startswith("-"):
            style = "red"
        else:
            style = "dim"
        text.append(line, style=style)
    return text


def fmt(
    files: Annotated[
        list[str] | None,
        typer.Argument(help="Files, directories or glob patterns. Defaults to **/*.ts and **/*.tsx."),
    ] = None,
    fix: Annotated[bool, typer.Option("--fix", help="Write formatted files back instead of showing a diff.")] = False,
    indent: Annotated[
        str | None,
        typer.Option(help="Indentation: 'tab' or a number of spaces (default 2, env STYLED_FMT_INDENT)."),
    ] = None,
    tag: Annotated[
        list[str] | None,
        typer.Option("--tag", help="Styling tag name; repeatable (default: styled, css; env STYLED_FMT_TAGS)."),
    ] = None,
    on_template_error: Annotated[
        str | None,
        typer.Option(help="What a broken template does: 'abort-file' (default) or 'skip-template'."),
    ] = None,
    verbose: Annotated[int, typer.Option("--verbose", "-v", count=True, help="Log more (-v info, -vv debug).")] = 0,
    show_version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
    ] = False,
) -> None:
    """Format CSS inside styled/css tagged template literals."""
    _configure_logging(verbose)
    try:
        options = load_options(indent=indent, tags=tag, error_policy=on_template_error)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    paths = resolve_files(files or [])
    if not paths:
        console.print("[yellow]No files found.[/yellow]")
        raise typer.Exit(0)

    results = asyncio.run(format_paths(paths, options, fix=fix))

    has_diffs = False
    has_errors = False
    for result in results:
        if result.error is not None:
            has_errors = True
            console.print(f"[red]Error processing file: {escape(str(result.path))}[/red]")
            console.print(f"[red]{escape(result.error)}[/red]")
        elif result.written:
            console.print(f"[green]Fixed: {escape(str(result.path))}[/green]")
        elif result.changed:
            has_diffs = True
            console.print(f"\n[bold]Diff: {escape(str(result.path))}[/bold]")
            console.print(_render_diff(result))
        elif not fix:
            console.print(f"[green]No changes needed: {escape(str(result.path))}[/green]")

    if has_diffs:
        console.print("\n[red]Formatting issues found.[/red]")
        raise typer.Exit(1)
    if has_errors:
        console.print("\n[red]Some files could not be processed.[/red]")
        raise typer.Exit(1)
    console.print("\n[green]All files are formatted correctly.[/green]")
