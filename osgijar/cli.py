"""osgijar CLI application with Typer."""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Annotated
from zipfile import BadZipFile

import typer

from osgijar import __version__
from osgijar.bootstrap import bootstrap_application
from osgijar.config import get_settings, set_settings
from osgijar.jar.archive import read_entries
from osgijar.jar.configuration import ConfigurationFileError
from osgijar.project import ProjectConfigError
from osgijar.utils.cli_output import json_response
from osgijar.utils.hashing import compute_sha256

if TYPE_CHECKING:
    from osgijar.bootstrap import ApplicationContainer

app = typer.Typer(
    name="osgijar",
    help="Package front-end build output as an OSGi bundle archive",
    add_completion=False,
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"osgijar version {__version__}")
        raise typer.Exit()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("osgijar").setLevel(level)


@contextmanager
def _abort_on_error() -> Iterator[None]:
    """Report build failures and exit with status 1."""
    try:
        yield
    except (
        FileNotFoundError,
        ProjectConfigError,
        ConfigurationFileError,
        BadZipFile,
        OSError,
    ) as exc:
        logger.debug("Command failed", exc_info=True)
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


def _container() -> "ApplicationContainer":
    return bootstrap_application(get_settings())


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
    project_dir: Annotated[
        Path | None,
        typer.Option("--project-dir", "-C", help="Project root containing package.json"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging"),
    ] = False,
    no_compress: Annotated[
        bool,
        typer.Option("--no-compress", help="Store archive entries without compression"),
    ] = False,
) -> None:
    """osgijar - Build OSGi bundles from front-end projects."""
    # Update settings with CLI flags
    settings = get_settings()
    if project_dir:
        settings.project_dir = project_dir
    if verbose:
        settings.log_level = "DEBUG"
    if no_compress:
        settings.compress = False
    set_settings(settings)

    _configure_logging(settings.log_level)


@app.command("build")
def build(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output build summary as JSON"),
    ] = False,
) -> None:
    """Create the bundle archive from the project's build output."""
    with _abort_on_error():
        container = _container()
        result = container.jar_service.create_jar()

    if json_output:
        typer.echo(json_response("jar_build", 1, **result.model_dump(mode="json")))
        return

    file_count = sum(1 for entry in result.entries if not entry.endswith("/"))
    typer.secho(f"✅ Wrote {result.output_path}", fg=typer.colors.GREEN)
    typer.echo(f"Bundle: {result.symbolic_name} {result.version}")
    typer.echo(f"Files: {file_count}")
    typer.echo(f"SHA-256: {result.sha256}")
    if result.minimum_extender_version:
        typer.echo(f"Requires extender >= {result.minimum_extender_version}")


@app.command("manifest")
def manifest() -> None:
    """Print the manifest that a build would write."""
    with _abort_on_error():
        container = _container()
        text = container.jar_service.render_manifest()

    typer.echo(text, nl=False)


@app.command("inspect")
def inspect(
    jar_path: Annotated[Path, typer.Argument(help="Bundle archive to list")],
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output entries as JSON"),
    ] = False,
) -> None:
    """List the entries of a bundle archive."""
    if not jar_path.exists():
        typer.secho(f"Error: Archive not found: {jar_path}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    with _abort_on_error():
        content = jar_path.read_bytes()
        entries = read_entries(content)
        digest = compute_sha256(content)

    files = [entry for entry in entries if not entry.is_dir]

    if json_output:
        typer.echo(
            json_response(
                "jar_entries",
                1,
                archive=str(jar_path),
                sha256=digest,
                entries=[
                    {"path": entry.path, "size": entry.size, "crc": entry.crc}
                    for entry in files
                ],
            )
        )
        return

    for entry in files:
        typer.echo(f"{entry.size:>10}  {entry.path}")
    typer.secho(f"{len(files)} file(s), SHA-256 {digest}", fg=typer.colors.BLUE)


if __name__ == "__main__":
    app()
