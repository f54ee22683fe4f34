"""
Standard exit codes for semnote commands.

Following Unix/POSIX conventions for command-line tools.
"""

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors
USAGE_ERROR = 2          # Misuse of shell command (wrong arguments, etc.)

# Application-specific exit codes (64-113 are typically available)
RESOLUTION_ERROR = 64    # A revision or base reference could not be resolved
GIT_ERROR = 65           # A git command failed
CONFIG_ERROR = 66        # Configuration file error
DATA_ERROR = 70          # Data format or validation error
PARTIAL_SUCCESS = 71     # Some operations succeeded, some failed
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)

# Exit code mappings for common exceptions
EXCEPTION_EXIT_CODES = {
    'FileNotFoundError': GENERAL_ERROR,
    'TimeoutError': GIT_ERROR,
    'ValueError': DATA_ERROR,
    'KeyError': DATA_ERROR,
    'KeyboardInterrupt': INTERRUPTED,
}


def get_exit_code_for_exception(exc: Exception) -> int:
    """
    Get the appropriate exit code for an exception.

    Args:
        exc: The exception that occurred

    Returns:
        Appropriate exit code
    """
    if isinstance(exc, CommandError):
        return exc.exit_code
    exc_name = exc.__class__.__name__
    return EXCEPTION_EXIT_CODES.get(exc_name, GENERAL_ERROR)


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class ArgumentError(CommandError):
    """Raised for an unrecognized direction or change classification."""
    def __init__(self, message: str):
        super().__init__(message, USAGE_ERROR)


class ResolutionError(CommandError):
    """Raised when git cannot resolve a revision or base reference."""
    def __init__(self, message: str):
        super().__init__(message, RESOLUTION_ERROR)


class GitError(CommandError):
    """Raised when a git command fails."""
    def __init__(self, message: str):
        super().__init__(message, GIT_ERROR)


class ConfigError(CommandError):
    """Raised when there's a configuration error."""
    def __init__(self, message: str):
        super().__init__(message, CONFIG_ERROR)


class FormatError(CommandError):
    """Raised when a record or version string is malformed."""
    def __init__(self, message: str):
        super().__init__(message, DATA_ERROR)


class TagCreationError(GitError):
    """Raised when a tag cannot be created and the run must stop."""
    def __init__(self, message: str, name: str = "", revision: str = ""):
        super().__init__(message)
        self.name = name
        self.revision = revision


class PartialSuccessError(CommandError):
    """Raised when some operations succeed and some fail."""
    def __init__(self, message: str, succeeded: int = 0, failed: int = 0):
        super().__init__(message, PARTIAL_SUCCESS)
        self.succeeded = succeeded
        self.failed = failed
