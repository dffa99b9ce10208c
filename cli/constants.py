"""CLI constants and configuration."""

from prompt_toolkit.styles import Style

COMMANDS = ["ls", "upload", "download", "exists", "rm", "clear", "exit", "help"]

STYLE = Style.from_dict(
    {
        "prompt": "#2E86C1 bold",
        "command": "#0088ff bold",
    }
)

BLUE = "\033[38;2;46;134;193m"
GREEN = "\033[32m"
RESET = "\033[0m"

LOGO = f"""{BLUE}
  _   _    _    ____    ____       _     _
 | \\ | |  / \\  / ___|  | __ ) _ __(_) __| | __ _  ___
 |  \\| | / _ \\ \\___ \\  |  _ \\| '__| |/ _` |/ _` |/ _ \\
 | |\\  |/ ___ \\ ___) | | |_) | |  | | (_| | (_| |  __/
 |_| \\_/_/   \\_\\____/  |____/|_|  |_|\\__,_|\\__, |\\___|
                                            |___/
{RESET}"""

WELCOME_TITLE = "NAS Bridge CLI - browse and transfer files on the share"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "nas> "

HELP_TEXT = """Available commands:
  ls [remote_dir]                                 List a share directory (empty = base)
  upload <local_file> [remote_dir] [--no-overwrite]
                                                  Upload a file; --no-overwrite stores name_N.ext
  download <remote_file> [local_path]             Download a file, resuming a partial local copy
  exists <remote_path>                            Check whether a path exists
  rm <remote_path>                                Delete a file or a folder with its contents
  clear                                           Clear screen and redisplay welcome message
  help                                            Show this help
  exit                                            Exit REPL

Examples:
  ls reports/2024
  upload ./summary.pdf reports/2024 --no-overwrite
  download reports/2024/summary.pdf
  download videos/talk.mp4 ./talk.mp4
  rm reports/2024/old.pdf"""

TRANSFER_CHUNK_SIZE = 64 * 1024
