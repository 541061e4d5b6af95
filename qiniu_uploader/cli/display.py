"""Console rendering for the CLI and the interactive session."""
import sys
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.config import UploaderConfig
from ..core.exceptions import UploaderError
from ..core.upload.models import UploadOutcome, RemoteFile, format_size
from ..core.upload.services import IMAGE_EXTENSIONS, MAX_FILE_SIZE

RULE_WIDTH = 51


def redact_secret(value: str, visible: int = 4) -> str:
    """Show only the first characters of a secret."""
    if not value:
        return "not set"
    if len(value) <= visible:
        return "*** (set)"
    return f"{value[:visible]}*** (set)"


def render_banner(console: Console) -> None:
    console.print("[bold]Qiniu uploader - interactive mode[/bold]")
    console.print("=" * RULE_WIDTH)
    console.print("Supported input:")
    console.print("  1. A file path to upload (drag a file into the terminal)")
    console.print("  2. [cyan]list[/cyan] to show uploaded files")
    console.print("  3. [cyan]config[/cyan] to show the current configuration")
    console.print("  4. [cyan]quit[/cyan] or [cyan]exit[/cyan] (or an empty line) to leave")
    console.print("=" * RULE_WIDTH)


def drag_drop_instructions() -> str:
    """Usage notes for dropping files onto the terminal."""
    allowed = ", ".join(ext.lstrip(".") for ext in IMAGE_EXTENSIONS if ext != ".jpeg")
    platform = {
        "win32": "Windows",
        "darwin": "macOS",
    }.get(sys.platform, "Linux")
    lines = [
        "Drag and drop:",
        "  1. Open your file manager",
        "  2. Select the file to upload",
        "  3. Drag it onto this terminal window",
        f"  4. The path is filled in automatically ({platform}); press Enter",
        "",
        "Notes:",
        f"  - Image files only ({allowed})",
        f"  - Size limit: {MAX_FILE_SIZE // (1024 * 1024)}MB",
        "  - Windows paths are converted automatically under WSL",
    ]
    return "\n".join(lines)


def render_outcome(console: Console, outcome: UploadOutcome) -> None:
    console.print("[green]Upload succeeded[/green]")
    console.print(f"File: {escape(outcome.file_name)}")
    console.print(f"Size: {format_size(outcome.size_bytes)}")
    console.print(f"URL: [link={outcome.url}]{outcome.url}[/link]")
    console.print(f"Key: {outcome.remote_key}")


def render_file_list(console: Console, files: Sequence[RemoteFile]) -> None:
    console.print("\n[bold]Uploaded files[/bold]")
    if not files:
        console.print("  No uploaded files yet")
        return

    table = Table()
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name")
    table.add_column("Size", justify="right")
    table.add_column("Uploaded")
    table.add_column("URL", style="cyan")

    for i, item in enumerate(files, 1):
        table.add_row(
            str(i),
            escape(item.name),
            format_size(item.size),
            item.uploaded.strftime("%Y-%m-%d %H:%M:%S"),
            item.url,
        )

    console.print(table)


def render_config(
    console: Console,
    config: Optional[UploaderConfig],
    config_path: Optional[Path] = None
) -> None:
    if config is None:
        console.print("[red]Configuration is not loaded[/red]")
        console.print("Run 'qu config init' to create it")
        return

    console.print("\n[bold]Current configuration[/bold]")
    console.print("=" * RULE_WIDTH)
    console.print("Qiniu:")
    console.print(f"  Access Key: {redact_secret(config.access_key)}")
    console.print(f"  Secret Key: {redact_secret(config.secret_key)}")
    console.print(f"  Bucket: {config.bucket}")
    console.print(f"  Domain: {config.domain}")

    console.print("\nHotkey:")
    console.print(f"  Shortcut: {config.hotkey_display or 'not set'}")

    console.print("\nUI:")
    console.print(f"  Auto copy URL: {config.auto_copy_url}")
    console.print(f"  Show progress: {config.show_progress}")

    if config_path is not None:
        console.print(f"\nConfig file: {config_path}")
    console.print("=" * RULE_WIDTH)


def render_error(console: Console, error: UploaderError) -> None:
    console.print(f"[red]Error: {escape(error.message)}[/red]")
