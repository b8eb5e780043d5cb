"""
Sirius CLI Entry Point.

This module exposes the dependency resolution and build-staleness engine to
the build-script generator and to users. Each command is a single synchronous
pass over a workspace: a folder whose sibling sub-folders are library or
application projects.

Commands:

1.  **index**: Builds (or loads from cache) the workspace inclusion index that
    maps every known class to the artifact providing it.
2.  **imports**: Lists the class references found in a source tree.
3.  **resolve**: Resolves a project's references to dependency artifacts.
4.  **must-build**: Tells whether a project, or anything it depends on, is stale.
5.  **invalidate**: Deletes a project's artifacts, its dependencies' artifacts
    and the workspace index cache.

Usage:
    $ python main.py must-build /path/to/workspace/MyApp

Dependencies:
    - Typer: CLI argument parsing and app structure.
    - Rich: Terminal output, colors and tables.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich import print as pr
from rich.markup import escape
from rich.table import Table

from core.config import ResolverContext, build_context, workspace_of_source_root
from core.exceptions import FileIOError, SettingsError, WorkspaceError
from core.indexer import build_or_load_index
from core.invalidation import invalidate as invalidate_project
from core.projects import find_source_root
from core.resolver import resolve as resolve_classes
from core.scanner import list_class_imports
from core.staleness import must_build as project_must_build

app = typer.Typer(help="Dependency resolution and build staleness for library workspaces.")

ProjectArg = Annotated[
    Path,
    typer.Argument(
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        help="Project folder, inside a workspace",
    ),
]
QuietOpt = Annotated[
    bool, typer.Option("--quiet", "-q", help="Suppress warnings and informational output.")
]


@app.command()
def index(
    workspace: Annotated[
        Path,
        typer.Argument(
            exists=True,
            file_okay=False,
            dir_okay=True,
            resolve_path=True,
            help="Workspace folder holding the sibling projects",
        ),
    ],
    rebuild: Annotated[
        bool, typer.Option("--rebuild", help="Ignore the index cache and rescan every project.")
    ] = False,
    quiet: QuietOpt = False,
):
    """
    Build or load the workspace inclusion index and print its records.
    """
    context = _make_context(workspace, quiet)
    inclusion_index = _run(
        lambda: build_or_load_index(workspace, context, reuse_cache=not rebuild), context
    )

    table = Table("Artifact", "Qualified", "Unqualified")
    for record in inclusion_index:
        table.add_row(
            escape(record.artifact_path),
            str(len(record.qualified_classes)),
            str(len(record.unqualified_classes)),
        )
    pr(table)


@app.command()
def imports(
    source_root: Annotated[
        Path,
        typer.Argument(
            exists=True,
            file_okay=False,
            dir_okay=True,
            resolve_path=True,
            help="Source folder to scan",
        ),
    ],
    quiet: QuietOpt = False,
):
    """
    Print the class references found under a source folder, one per line.
    """
    context = _make_context(workspace_of_source_root(source_root), quiet)
    for reference in _run(lambda: list_class_imports(source_root, context), context):
        typer.echo(reference)


@app.command()
def resolve(project: ProjectArg, quiet: QuietOpt = False):
    """
    Print the artifacts a project's class references resolve to, one per line.
    """
    context = _make_context(project.parent, quiet)
    source_root = find_source_root(project, context)
    if source_root is None:
        pr(f"[red]Error:[/red] No source folder found in [green]'{project}'[/green]")
        raise typer.Exit(code=1)

    def _resolve() -> list[str]:
        inclusion_index = build_or_load_index(project.parent, context)
        references = list_class_imports(source_root, context)
        return resolve_classes(inclusion_index, references, context.reporter)

    for artifact in _run(_resolve, context):
        typer.echo(artifact)


@app.command("must-build")
def must_build(project: ProjectArg, quiet: QuietOpt = False):
    """
    Print "true" if the project or any of its dependencies must be rebuilt, else "false".
    """
    context = _make_context(project.parent, quiet)
    verdict = _run(lambda: project_must_build(project, context), context)
    typer.echo("true" if verdict else "false")


@app.command()
def invalidate(
    project: ProjectArg,
    keep_index_cache: Annotated[
        bool,
        typer.Option("--keep-index-cache", help="Do not delete the workspace index cache."),
    ] = False,
    quiet: QuietOpt = False,
):
    """
    Delete the artifacts of a project and of its dependencies.
    """
    context = _make_context(project.parent, quiet)
    deleted = _run(lambda: invalidate_project(project, context, keep_index_cache), context)
    if not quiet:
        pr(f"[green]Deleted {len(deleted)} artifact(s).[/green]")


def _make_context(workspace: Path, quiet: bool) -> ResolverContext:
    try:
        return build_context(workspace, quiet=quiet)
    except SettingsError as e:
        print_settings_err(e)
        raise typer.Exit(code=1) from e


def _run(operation, context: ResolverContext):
    """Run an engine operation, turning hard failures into friendly exits."""
    try:
        return operation()
    except WorkspaceError as e:
        context.reporter.error(e.message)
        raise typer.Exit(code=1) from e
    except FileIOError as e:
        print_file_io_err(e)
    except Exception as e:  # noqa: BLE001
        # Catch-all for any unexpected errors - ensures users always see
        # a friendly message instead of a raw Python stack trace
        print_unexpected_err(e)


def print_settings_err(e: SettingsError) -> None:
    """
    Displays a user-friendly error message for a malformed settings file.
    """
    pr("❌ [bold red]Settings Error[/bold red]")
    pr(f"{escape(e.message)}")
    if e.file_path:
        pr(f"File path: [yellow]{escape(e.file_path)}[/yellow]")


def print_file_io_err(e: FileIOError) -> None:
    """
    Displays a user-friendly error message for file I/O operation failures.

    Prints formatted error messages to inform the user about file read/write
    issues, including the file path and diagnostic information for troubleshooting.

    Args:
        e (FileIOError): The exception that was raised, containing error details
            and file path information.

    Raises:
        typer.Exit: Always raises with exit code 1 to terminate the application.
    """
    pr("❌ [bold red]File I/O Error[/bold red]")
    pr(f"The app encountered an error while working with files: {escape(e.message)}")
    if e.file_path:
        pr(f"File path: [yellow]{escape(e.file_path)}[/yellow]")

    pr("\n[yellow]Quick Fix:[/yellow] Check file permissions and available disk space.")
    if e.original_exception:
        pr(f"\nTechnical details: {escape(str(e.original_exception))}")

    raise typer.Exit(code=1) from e


def print_unexpected_err(e: Exception) -> None:
    """
    Displays a user-friendly error message for unexpected errors.

    Args:
        e (Exception): The unexpected exception that was raised.

    Raises:
        typer.Exit: Always raises with exit code 1 to terminate the application.
    """
    pr("❌ [bold red]Unexpected Error[/bold red]")
    pr("An unexpected error occurred while processing your request.")
    pr(f"\n[yellow]Error Type:[/yellow] {type(e).__name__}")
    pr(f"[yellow]Error Message:[/yellow] {escape(str(e))}")

    pr("\n--- PLEASE REPORT THIS ---")
    if e.__cause__:
        pr(f"Caused by: {escape(str(e.__cause__))}")

    raise typer.Exit(code=1) from e


if __name__ == "__main__":
    app()
