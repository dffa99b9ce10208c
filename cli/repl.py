"""Interactive prompt_toolkit session for the NAS bridge CLI."""

import os
import sys
from typing import Callable, Dict

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import InMemoryHistory

from cli import commands
from cli.constants import (
    COMMANDS,
    HELP_TEXT,
    LOGO,
    PROMPT_TEXT,
    STYLE,
    WELCOME_HELP,
    WELCOME_TITLE,
)
from cli.models import (
    CommandRequest,
    DeleteCommand,
    DownloadCommand,
    ExistsCommand,
    ListCommand,
    UploadCommand,
)
from cli.parser import ParseError, parse_command
from common.logging_config import get_logger

logger = get_logger(__name__)

HANDLERS: Dict[type, Callable[[CommandRequest], str]] = {
    ListCommand: commands.handle_list,
    UploadCommand: commands.handle_upload,
    DownloadCommand: commands.handle_download,
    ExistsCommand: commands.handle_exists,
    DeleteCommand: commands.handle_delete,
}


def clear_screen() -> None:
    """Clear the terminal screen (cross-platform)."""
    os.system("cls" if sys.platform == "win32" else "clear")


def show_welcome() -> None:
    print(LOGO)
    print(WELCOME_TITLE)
    print(WELCOME_HELP)


def dispatch_command(cmd_obj: CommandRequest) -> str:
    """Run the handler registered for a parsed command."""
    handler = HANDLERS.get(type(cmd_obj))
    if handler is None:
        return f"Unknown command type: {type(cmd_obj).__name__}"
    return handler(cmd_obj)


def run_line(line: str) -> bool:
    """
    Execute one line of input.

    Returns:
        False when the session should end
    """
    word = line.strip()
    if not word:
        return True
    if word == "exit":
        print("Goodbye!")
        return False
    if word == "help":
        print(HELP_TEXT)
        return True
    if word == "clear":
        clear_screen()
        show_welcome()
        return True

    try:
        print(dispatch_command(parse_command(line)))
    except ParseError as e:
        print(f"Error: {e}")
    return True


def repl_loop() -> None:
    """Start the interactive session and run until exit or EOF."""
    session: PromptSession = PromptSession(
        completer=WordCompleter(COMMANDS, ignore_case=True),
        history=InMemoryHistory(),
        style=STYLE,
    )

    clear_screen()
    show_welcome()

    running = True
    while running:
        try:
            running = run_line(session.prompt([("class:prompt", PROMPT_TEXT)]))
        except KeyboardInterrupt:
            continue
        except EOFError:
            print("\nGoodbye!")
            running = False

    commands.close_client()
    logger.debug("REPL session ended")
