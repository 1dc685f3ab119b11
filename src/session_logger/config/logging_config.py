# src/session_logger/config/logging_config.py

import sys

from loguru import logger

DIAGNOSTICS_FORMAT = "<red>session_logger</red> | <level>{level: <8}</level> | {message}"

# --- Config loguru ---
# Internal failures (rotation, sink writes, listeners) are reported here and
# never in the session logs. Replace loguru's default handler with a quieter
# stderr sink unless the host application already took over loguru.
try:
    logger.remove(0)
except ValueError:
    pass
else:
    logger.add(
        sys.stderr,
        level="WARNING",  # Only shows WARNING, ERROR, CRITICAL
        format=DIAGNOSTICS_FORMAT,
    )

__all__ = ["logger"]
