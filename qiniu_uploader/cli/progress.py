"""Upload progress display."""
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn

from ..core.path import clean_input
from ..core.upload import UploadCoordinator, UploadOutcome, UploadProgress


def upload_with_progress(
    coordinator: UploadCoordinator,
    console: Console,
    raw_path: str
) -> UploadOutcome:
    """
    Upload a file, showing a progress bar when enabled in the config.

    The bar is driven by the SDK's progress handler. Small files go through a
    single form upload that reports no intermediate progress, so the bar is
    completed once the call returns.
    """
    console.print(f"\nReceived file: {raw_path.strip()}", markup=False)

    if not coordinator.config.show_progress:
        return coordinator.upload(raw_path)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
        transient=True
    ) as progress:
        name = clean_input(raw_path).replace("\\", "/").rsplit("/", 1)[-1] or raw_path
        task = progress.add_task(f"Uploading {escape(name)}", total=100)

        def on_progress(p: UploadProgress):
            progress.update(task, completed=p.percentage)

        outcome = coordinator.upload(raw_path, progress_callback=on_progress)
        progress.update(task, completed=100)

    return outcome
