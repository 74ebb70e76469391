import logging

import typer
from rich.console import Console

from .commands.photo_cmd import (
    build_storage,
    delete_from_cli,
    exists_from_cli,
    mkdir_from_cli,
    path_from_cli,
    resource_from_cli,
    upload_from_cli,
    url_from_cli,
)
from .config.env import load_env

console = Console()

app = typer.Typer(help="SimplePhoto local photo storage tooling.")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show simple-photo version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    root: str = typer.Option(None, help="Project root (defaults to SIMPLE_PHOTO_PROJECT_ROOT or the cwd)"),
    save_path: str = typer.Option(None, help="Save directory relative to the project root"),
):
    if version:
        from ._version import __version__

        console.print(f"simple-photo {__version__}")
        raise typer.Exit()

    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)
    load_env()
    ctx.obj = {"root": root, "save_path": save_path}


def _storage(ctx: typer.Context, base_url: str = None):
    options = ctx.obj or {}
    return build_storage(options.get("root"), options.get("save_path"), base_url)


@app.command("upload")
def upload(
    ctx: typer.Context,
    file: str = typer.Argument(..., help="File to copy into the store"),
    destination: str = typer.Option(
        None, help="Target path; a trailing '/' keeps the source file name"
    ),
):
    """
    Upload a photo and print its stored reference.
    """
    upload_from_cli(_storage(ctx), file, destination)


@app.command("delete")
def delete(
    ctx: typer.Context,
    reference: str = typer.Argument(..., help="Stored photo reference"),
):
    """
    Delete a stored photo. Missing photos count as deleted.
    """
    delete_from_cli(_storage(ctx), reference)


@app.command("exists")
def exists(
    ctx: typer.Context,
    reference: str = typer.Argument(..., help="Stored photo reference"),
):
    """
    Check whether a photo is stored; exits 1 when it is not.
    """
    exists_from_cli(_storage(ctx), reference)


@app.command("path")
def path(
    ctx: typer.Context,
    reference: str = typer.Argument(None, help="Stored photo reference (optional)"),
):
    """
    Print the absolute path of a photo, or of the save directory.
    """
    path_from_cli(_storage(ctx), reference)


@app.command("url")
def url(
    ctx: typer.Context,
    reference: str = typer.Argument(..., help="Stored photo reference"),
    base_url: str = typer.Option(None, help="Public base URL (defaults to SIMPLE_PHOTO_BASE_URL)"),
):
    """
    Print the public URL of a photo.
    """
    url_from_cli(_storage(ctx, base_url), reference)


@app.command("resource")
def resource(
    ctx: typer.Context,
    reference: str = typer.Argument(..., help="Stored photo reference"),
):
    """
    Copy a photo to a temporary file and print its path.
    """
    resource_from_cli(_storage(ctx), reference)


@app.command("mkdir")
def mkdir(
    ctx: typer.Context,
    directory: str = typer.Argument(..., help="Directory relative to the save path"),
):
    """
    Create a directory inside the save path.
    """
    mkdir_from_cli(_storage(ctx), directory)


if __name__ == "__main__":
    app()
