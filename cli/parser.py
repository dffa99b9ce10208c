"""Command parser for CLI input."""

import shlex

from cli.models import (
    CommandRequest,
    DeleteCommand,
    DownloadCommand,
    ExistsCommand,
    ListCommand,
    UploadCommand,
)


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


def parse_command(input_line: str) -> CommandRequest:
    """Parse user input into a CommandRequest object.

    Args:
        input_line: Raw user input from REPL

    Returns:
        CommandRequest object (one of List/Upload/Download/Exists/Delete)

    Raises:
        ParseError: If command syntax is invalid
    """
    if not input_line.strip():
        raise ParseError("Empty command")

    try:
        tokens = shlex.split(input_line)
    except ValueError as e:
        raise ParseError(f"Invalid syntax: {e}")

    if not tokens:
        raise ParseError("Empty command")

    command_name = tokens[0]

    if command_name == "ls":
        return _parse_list(tokens[1:])
    elif command_name == "upload":
        return _parse_upload(tokens[1:])
    elif command_name == "download":
        return _parse_download(tokens[1:])
    elif command_name == "exists":
        return ExistsCommand(remote_path=_single_path("exists", tokens[1:]))
    elif command_name == "rm":
        return DeleteCommand(remote_path=_single_path("rm", tokens[1:]))
    else:
        raise ParseError(f"Unknown command: {command_name}")


def _parse_list(args: list[str]) -> ListCommand:
    """Parse 'ls [remote_dir]' command."""
    if len(args) > 1:
        raise ParseError("ls takes at most 1 argument: [remote_dir]")
    return ListCommand(remote_dir=args[0] if args else "")


def _parse_upload(args: list[str]) -> UploadCommand:
    """Parse 'upload <local_file> [remote_dir] [--no-overwrite]' command."""
    overwrite = "--no-overwrite" not in args
    positional = [arg for arg in args if arg != "--no-overwrite"]

    unknown = [arg for arg in positional if arg.startswith("--")]
    if unknown:
        raise ParseError(f"Unknown option: {unknown[0]}")

    if not 1 <= len(positional) <= 2:
        raise ParseError("upload requires <local_file> and an optional [remote_dir]")

    return UploadCommand(
        local_file=positional[0],
        remote_dir=positional[1] if len(positional) > 1 else "",
        overwrite=overwrite,
    )


def _parse_download(args: list[str]) -> DownloadCommand:
    """Parse 'download <remote_file> [local_path]' command."""
    if not 1 <= len(args) <= 2:
        raise ParseError("download requires <remote_file> and an optional [local_path]")

    return DownloadCommand(
        remote_path=args[0],
        output_path=args[1] if len(args) > 1 else None,
    )


def _single_path(command_name: str, args: list[str]) -> str:
    if len(args) != 1:
        raise ParseError(f"{command_name} requires exactly 1 argument: <remote_path>")
    return args[0]
