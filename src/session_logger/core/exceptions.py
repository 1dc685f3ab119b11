class SessionLoggerError(Exception):
    """Base class for errors raised by session_logger."""


class LoggerNotStartedError(SessionLoggerError):
    """A message was dispatched before ``SessionLogger.start`` was called."""
