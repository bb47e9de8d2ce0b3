# exportify/errors.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Exceptions for exportify.

Missing files are never errors; resolvers return None for those. These
exceptions cover the few conditions that stop a command.
"""


class ExportifyError(Exception):
    """Base class for all exportify failures surfaced to the user."""
    pass


class ConfigError(ExportifyError):
    """Raised when a configuration file cannot be read or validated."""
    pass


class UsageFileError(ExportifyError):
    """Raised when the usage dictionary is missing, unreadable or malformed."""
    pass


class PackageJsonError(ExportifyError):
    """Raised when the package.json of a package being fixed cannot be read."""
    pass


class PackageNotFoundError(ExportifyError):
    """Raised when `fix` is asked for a package that is not in the repository."""
    pass


class BatchAbortedError(ExportifyError):
    """Raised by a batch operation configured with continue_on_error=False.

    The original exception is available as ``__cause__``.
    """

    def __init__(self, input_value: str, message: str):
        super().__init__(f"Batch aborted at {input_value}: {message}")
        self.input_value = input_value
