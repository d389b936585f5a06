"""
statichash command line.

Commands:
    url    Print the fingerprinted URL for one or more files
    serve  Serve a static directory under fingerprinted URLs
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ._version import get_version
from .config import DEFAULT_MAX_AGE, STATIC_PATH, StaticConfig
from .errors import StaticAssetError
from .logging import setup_logging
from .resolver import Resolver

app = typer.Typer(help="Content-addressed static asset URLs", no_args_is_help=True)
console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"statichash {get_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Content-addressed static asset URLs with long-lived cache headers."""


@app.command("url")
def url_command(
    names: list[str] = typer.Argument(..., help="Logical file names, in concatenation order"),
    directory: Path = typer.Option(Path("."), "--dir", "-d", help="Static file root"),
    prefix: str = typer.Option(STATIC_PATH, "--prefix", help="URL prefix"),
) -> None:
    """Print the combined fingerprinted URL for NAMES."""
    try:
        resolver = Resolver(StaticConfig(file_root=directory, prefix=prefix))
        url = resolver.resolve(names)
    except StaticAssetError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)
    console.print(url, highlight=False, soft_wrap=True)


@app.command("serve")
def serve_command(
    directory: Path = typer.Option(..., "--dir", "-d", help="Static file root"),
    host: str = typer.Option("127.0.0.1", "--host", help="Host to bind to"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to bind to"),
    max_age: int = typer.Option(
        DEFAULT_MAX_AGE, "--max-age", help="Cache-Control max-age in seconds"
    ),
    cache: bool = typer.Option(
        True,
        "--cache/--no-cache",
        help="Keep resolved content in memory (default) or re-read files per request",
    ),
    prefix: str = typer.Option(STATIC_PATH, "--prefix", help="URL prefix"),
    log_level: str = typer.Option("INFO", "--log-level", help="Log level"),
    log_dir: Path | None = typer.Option(None, "--log-dir", help="Write JSONL logs here"),
    preload: bool = typer.Option(
        True,
        "--preload/--no-preload",
        help="Fingerprint every file under DIR at startup",
    ),
    show_urls: bool = typer.Option(False, "--show-urls", help="Print preloaded URLs"),
) -> None:
    """
    Serve DIR under fingerprinted URLs.

    With --no-cache, URLs for single files can be requested without a
    prior resolution: the file is read from disk and served when its
    content still matches the digest in the URL.
    """
    import uvicorn

    from .routes import create_static_app

    try:
        config = StaticConfig(
            file_root=directory,
            max_age=max_age,
            cache_enabled=cache,
            prefix=prefix,
        )
    except StaticAssetError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    if not config.file_root.is_dir():
        err_console.print(f"[red]Error:[/red] {config.file_root} is not a directory")
        raise typer.Exit(code=1)

    setup_logging(log_level, log_dir)
    static_app = create_static_app(config)
    if preload:
        try:
            urls = static_app.state.static_assets.preload()
        except StaticAssetError as e:
            err_console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(code=1)
        if show_urls:
            table = Table("File", "URL")
            for name, url in urls.items():
                table.add_row(name, url)
            console.print(table)

    console.print(
        f"[bold]statichash[/bold] serving {config.file_root} at "
        f"http://{host}:{port}{config.prefix}"
    )
    uvicorn.run(static_app, host=host, port=port, log_level=log_level.lower())


def main() -> None:
    app()


if __name__ == "__main__":
    main()
