"""
Exception types for File Courier.

Every error raised by the locate/read/transmit pipeline derives from
CourierError so callers can tell pipeline failures apart from bugs.
"""

from pathlib import Path
from typing import Optional, Union


class CourierError(Exception):
    """Base class for all pipeline errors."""
    pass


class TargetNotFoundError(CourierError):
    """Raised when a target filename is never encountered during traversal."""

    def __init__(self, name: str, root: Union[str, Path]):
        self.name = name
        self.root = str(root)
        super().__init__(f"File not found: {name} (searched under {self.root})")


class FileReadError(CourierError):
    """Raised when a located file cannot be read from disk."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = str(path)
        super().__init__(f"IO Error: cannot read {self.path}: {reason}")


class PayloadDecodeError(CourierError):
    """Raised when bytes are not valid UTF-8 where text is required."""

    def __init__(self, reason: str, path: Optional[Union[str, Path]] = None):
        self.path = str(path) if path is not None else None
        where = f" in {self.path}" if self.path else ""
        super().__init__(f"Decode Error{where}: {reason}")


class TransmitError(CourierError):
    """Raised when the payload could not be delivered to the endpoint."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(f"Send Error: {message}")
