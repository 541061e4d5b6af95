"""
Interactive upload session.

A single-threaded read-dispatch loop: read a line, classify it as exit,
list, config or upload, dispatch, and prompt again until the user leaves or
input ends.
"""
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from rich.console import Console

from ..core.exceptions import UploaderError
from ..core.logging import get_logger
from ..core.upload import UploadCoordinator, UploadRequest
from ..core.upload.coordinator import DEFAULT_LIST_LIMIT
from .display import (
    drag_drop_instructions,
    render_banner,
    render_config,
    render_error,
    render_file_list,
    render_outcome,
)
from .progress import upload_with_progress

logger = get_logger("qiniu_uploader.session")

PROMPT = "\nEnter a file path or command: "
EXIT_WORDS = frozenset({"", "quit", "exit"})


class SessionState(Enum):
    PROMPTING = "prompting"
    DISPATCHING = "dispatching"
    CLOSED = "closed"


class Command(Enum):
    EXIT = "exit"
    LIST = "list"
    CONFIG = "config"
    UPLOAD = "upload"


def classify(line: Optional[str]) -> Command:
    """
    Classify one line of input.

    Args:
        line: Stripped input, or None at end of input

    Returns:
        The command the line stands for; anything unrecognized is a path
    """
    if line is None:
        return Command.EXIT
    word = line.strip().lower()
    if word in EXIT_WORDS:
        return Command.EXIT
    if word == "list":
        return Command.LIST
    if word == "config":
        return Command.CONFIG
    return Command.UPLOAD


class InputReader:
    """Reads prompt lines, mapping end of input to None."""

    def __init__(self, read: Optional[Callable[[str], str]] = None):
        """
        Initialize reader.

        Args:
            read: Function that shows a prompt and returns a line (default: input)
        """
        self._read = read or input

    def read_line(self, prompt: str = PROMPT) -> Optional[str]:
        try:
            line = self._read(prompt)
        except (EOFError, KeyboardInterrupt):
            return None
        return line.strip()


class SessionLoop:
    """
    Interactive prompt: PROMPTING -> DISPATCHING -> PROMPTING until CLOSED.

    Errors from a dispatched command are reported and the loop continues;
    only an exit command or the end of input closes the session.
    """

    def __init__(
        self,
        coordinator: UploadCoordinator,
        console: Console,
        reader: Optional[InputReader] = None,
        config_path: Optional[Path] = None,
        list_limit: int = DEFAULT_LIST_LIMIT
    ):
        self.coordinator = coordinator
        self.console = console
        self.reader = reader or InputReader(console.input)
        self.config_path = config_path
        self.list_limit = list_limit
        self._state = SessionState.PROMPTING

    @property
    def state(self) -> SessionState:
        return self._state

    def start(self) -> bool:
        """
        Print the banner and check the client is configured.

        Returns:
            False if the session cannot start
        """
        if not self.coordinator.is_configured:
            self.console.print("[red]Qiniu client is not configured[/red]")
            self.console.print("Run 'qu config init' to set up your Qiniu credentials")
            self._state = SessionState.CLOSED
            return False

        render_banner(self.console)
        self.console.print()
        self.console.print(drag_drop_instructions())
        return True

    def run(self) -> bool:
        """
        Run the loop until the session is closed.

        Returns:
            False if the session could not start
        """
        if not self.start():
            return False
        while self.step() is not SessionState.CLOSED:
            pass
        return True

    def step(self) -> SessionState:
        """
        Read one line and dispatch it.

        Returns:
            The state after the line was handled
        """
        if self._state is SessionState.CLOSED:
            return self._state

        line = self.reader.read_line(PROMPT)
        command = classify(line)

        if command is Command.EXIT:
            self.console.print("Bye!")
            self._state = SessionState.CLOSED
            return self._state

        self._state = SessionState.DISPATCHING
        try:
            self.dispatch(command, line)
        except UploaderError as e:
            logger.debug(f"{command.value} failed: {e}")
            render_error(self.console, e)

        self._state = SessionState.PROMPTING
        return self._state

    def dispatch(self, command: Command, line: str) -> None:
        if command is Command.LIST:
            files = self.coordinator.list_files(limit=self.list_limit)
            render_file_list(self.console, files)
        elif command is Command.CONFIG:
            render_config(self.console, self.coordinator.config, self.config_path)
        else:
            request = UploadRequest(raw_input=line)
            outcome = upload_with_progress(self.coordinator, self.console, request.raw_input)
            render_outcome(self.console, outcome)
