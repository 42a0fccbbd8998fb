"""Process exit codes for the lockchart CLI."""

EXIT_SUCCESS = 0
# Fatal harness failure: fork or close failed, no finding was made.
EXIT_ERROR = 1
EXIT_USAGE = 2

__all__ = ["EXIT_ERROR", "EXIT_SUCCESS", "EXIT_USAGE"]
