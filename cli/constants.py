"""CLI constants and configuration."""

from prompt_toolkit.styles import Style

COMMANDS = [
    "register", "login", "logout", "whoami", "upload", "write", "download",
    "delete", "list", "storage", "stats", "demo", "clear", "exit", "help",
]

FILE_NAME_COMMANDS = ("download", "delete")

STYLE = Style.from_dict(
    {
        "prompt": "#2E9AFE bold",
        "command": "#0088ff bold",
    }
)

BLUE = "\033[38;2;46;154;254m"
RESET = "\033[0m"

LOGO = f"""{BLUE}
 ___         _             ___ _             _
|   \\ ___ __| |_  _ _ __  / __| |___ _  _ __| |
| |) / -_) _` | || | '_ \\| (__| / _ \\ || / _` |
|___/\\___\\__,_|\\_,_| .__/ \\___|_\\___/\\_,_\\__,_|
                   |_|
{RESET}"""

WELCOME_TITLE = "DedupCloud CLI - Cloud Storage with Chunk Deduplication"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "dedupcloud> "

HELP_TEXT = """Available commands:
  register <username> <password>      Register new user account
  login <username> <password>         Login and start a session
  logout                              End the current session
  whoami                              Show the logged in user
  upload <path> [name]                Upload a local file (stored as [name] or the file's name)
  write <name> <content...>           Store the given text as a file
  download <name> [output_path]       Download a file (prints it when no output path is given)
  delete <name>                       Delete a file
  list                                List your files
  storage                             Show your storage usage
  stats                               Show store-wide deduplication statistics
  demo                                Upload the same content twice and show the dedup effect
  clear                               Clear screen and redisplay welcome message
  help                                Show this help
  exit                                Exit REPL

Examples:
  register alice mypassword123
  login alice mypassword123
  write notes.txt hello hello hello
  upload ./report.pdf
  download notes.txt
  download report.pdf out/report.pdf
  delete notes.txt
  stats"""

DEMO_CONTENT = (
    "This is a sample file content for testing deduplication! "
    "Data deduplication helps save storage space by storing "
    "identical chunks only once. This is very useful in cloud storage!"
)

DEMO_FILE_NAMES = ("demo_file_1.txt", "demo_file_2.txt")
