from pathlib import Path

# --- Directory layout ---
FULL_DIR_NAME = "full"
WARN_DIR_NAME = "warn"
ERROR_DIR_NAME = "error"
LATEST_LOG_NAME = "00A-latest.log"
LOG_SUFFIX = ".log"

# --- Defaults used by start() and the config loader ---
DEFAULT_NAME = "Logger"
DEFAULT_CONFIG_NAME = "logger-config.yml"


def default_log_directory() -> Path:
    return Path.cwd().joinpath("logs")


# --- Error path ---
SHUTDOWN_DELAY_SECONDS = 10
EXIT_STATUS = 0
NO_EXCEPTION_NAME = "No Exception"

# --- Date templates ---
CONSOLE_TIME_FORMAT = "%H:%M"
FILE_TIME_FORMAT = "%d-%m-%Y %H:%M:%S"
ARCHIVE_FILE_FORMAT = "%H-%M-%S  %Y-%m-%d"

# strftime("%B") / ("%a") follow the process locale, archive paths must not
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
WEEKDAY_ABBREVIATIONS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

# Characters (and control codes) that cannot appear in an archive file name
UNSAFE_FILENAME_CHARS = r'[*<>:?/"\\|\x00-\x1f\x7f]'
