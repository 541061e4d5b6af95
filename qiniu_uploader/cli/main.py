"""Qiniu uploader CLI - Main commands."""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from .. import __version__
from ..core.config import UploaderConfig, load_config, save_config, get_config_path
from ..core.exceptions import ConfigError, UploaderError
from ..core.logging import configure_logging
from ..core.upload import UploadCoordinator
from .display import render_config, render_error, render_outcome
from .progress import upload_with_progress
from .session import SessionLoop

app = typer.Typer(
    name="qu",
    help="Upload images to Qiniu Kodo, with drag-and-drop and WSL path support",
    add_completion=False,
    no_args_is_help=False,
)
config_app = typer.Typer(help="Manage the uploader configuration")
app.add_typer(config_app, name="config")

console = Console()


@dataclass
class AppState:
    """Configuration loaded once per invocation and shared by the commands."""
    config: UploaderConfig
    config_path: Optional[Path]


def _load_state() -> AppState:
    config_path = None
    try:
        config_path = get_config_path()
        return AppState(config=load_config(config_path), config_path=config_path)
    except ConfigError as e:
        console.print(f"[yellow]Warning: failed to load config: {escape(e.message)}[/yellow]")
        console.print("Run 'qu config init' to initialize the configuration")
        return AppState(config=UploaderConfig(), config_path=config_path)


def _state(ctx: typer.Context) -> AppState:
    root = ctx.find_root()
    if root.obj is None:
        root.obj = _load_state()
    return root.obj


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Qiniu uploader."""
    if debug:
        configure_logging(logging.DEBUG)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command()
def upload(
    ctx: typer.Context,
    path: Optional[str] = typer.Argument(None, help="File to upload"),
    file: Optional[str] = typer.Option(None, "--file", "-f", help="File to upload"),
):
    """Upload a file, or start the interactive prompt when no file is given."""
    state = _state(ctx)
    coordinator = UploadCoordinator.from_config(state.config)
    target = file or path

    if target:
        try:
            outcome = upload_with_progress(coordinator, console, target)
        except UploaderError as e:
            render_error(console, e)
            raise typer.Exit(1)
        render_outcome(console, outcome)
        return

    session = SessionLoop(coordinator, console, config_path=state.config_path)
    if not session.run():
        raise typer.Exit(1)


@app.command()
def service():
    """Start the background service (global hotkey and tray)."""
    console.print("[yellow]The background service is not implemented yet[/yellow]")
    console.print("Use 'qu upload' to start the interactive mode")


@app.command()
def serve(
    ctx: typer.Context,
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8080, "--port", "-p", help="Bind port"),
):
    """Run the HTTP upload API."""
    import uvicorn
    from ..server import create_app

    state = _state(ctx)
    if not state.config.is_configured:
        console.print("[yellow]Warning: Qiniu is not configured, uploads will be rejected[/yellow]")

    console.print(f"Serving on http://{host}:{port}")
    uvicorn.run(create_app(state.config), host=host, port=port)


@app.command()
def version():
    """Show version information."""
    typer.echo(f"qiniu-uploader v{__version__}")


@config_app.command("init")
def config_init(ctx: typer.Context):
    """Create the configuration interactively."""
    console.print("[bold]Initialize Qiniu uploader configuration[/bold]")

    access_key = typer.prompt("Access Key")
    secret_key = typer.prompt("Secret Key", hide_input=True)
    bucket = typer.prompt("Bucket")
    domain = typer.prompt("Domain (optional)", default="", show_default=False)

    config = UploaderConfig(
        access_key=access_key.strip(),
        secret_key=secret_key.strip(),
        bucket=bucket.strip(),
        domain=domain.strip(),
    )

    try:
        config_path = save_config(config)
    except ConfigError as e:
        render_error(console, e)
        raise typer.Exit(1)

    ctx.find_root().obj = AppState(config=config, config_path=config_path)
    console.print("[green]Configuration saved[/green]")
    console.print(f"Config file: {config_path}")


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Show the current configuration."""
    state = _state(ctx)
    render_config(console, state.config, state.config_path)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
