"""
Configuration data models for File Courier.

This module defines the configuration for a courier run: where the search
starts, which two filenames are located, and where the payload is posted.
"""

from typing import Dict, List, Any
from pathlib import Path
from urllib.parse import urlparse
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .search_task import SearchTask, validate_bare_filename


DEFAULT_SPECIAL_FILE = "special_file.txt"
DEFAULT_SECRET_FILE = "secret_file.txt"
DEFAULT_ENDPOINT = "http://127.0.0.1"
DEFAULT_SOURCE_LINK = "https://github.com/NCGThompson/csci-485-project-3"

LOCAL_HOSTS = {'localhost', '127.0.0.1', '::1'}


class CourierConfig(BaseModel):
    """
    Main configuration for a courier run.

    Attributes:
        root: Directory the traversals start from
        special_file: Name of the file whose text is displayed
        secret_file: Name of the file whose bytes are posted
        endpoint: URL the payload is posted to
        source_link: Literal sent in the "github link" field of every request
        dry_run: Build the request but do not send it
    """

    model_config = ConfigDict(extra='forbid')

    root: str = Field(default_factory=lambda: str(Path.cwd()), description="Search root directory")
    special_file: str = Field(DEFAULT_SPECIAL_FILE, description="Filename whose contents are displayed")
    secret_file: str = Field(DEFAULT_SECRET_FILE, description="Filename whose contents are transmitted")
    endpoint: str = Field(DEFAULT_ENDPOINT, description="HTTP endpoint receiving the payload")
    source_link: str = Field(DEFAULT_SOURCE_LINK, description="Identifying link sent with the payload")
    dry_run: bool = Field(False, description="Skip the network request")

    @field_validator('root')
    @classmethod
    def validate_root(cls, v: str) -> str:
        """Expand user path; the root is allowed not to exist."""
        if not v or not v.strip():
            raise ValueError("Root directory cannot be empty")
        return str(Path(v.strip()).expanduser())

    @field_validator('special_file', 'secret_file')
    @classmethod
    def validate_filenames(cls, v: str) -> str:
        """Target names must be bare filenames."""
        return validate_bare_filename(v)

    @field_validator('endpoint')
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Endpoint must be an absolute http(s) URL."""
        v = v.strip()
        parsed = urlparse(v)
        if parsed.scheme not in ('http', 'https'):
            raise ValueError(f"Endpoint must use http or https: {v}")
        if not parsed.netloc:
            raise ValueError(f"Endpoint has no host: {v}")
        return v

    def special_task(self) -> SearchTask:
        """Search task for the displayed file."""
        return SearchTask(root=self.root, target_name=self.special_file)

    def secret_task(self) -> SearchTask:
        """Search task for the transmitted file."""
        return SearchTask(root=self.root, target_name=self.secret_file)

    def is_local_endpoint(self) -> bool:
        """Check whether the endpoint points at the local machine."""
        return urlparse(self.endpoint).hostname in LOCAL_HOSTS

    def validate_configuration(self) -> List[str]:
        """
        Collect non-fatal problems with the configuration.

        Returns:
            List of warning messages
        """
        warnings = []

        root_path = Path(self.root)
        if not root_path.exists():
            warnings.append(f"Root directory does not exist: {self.root}")
        elif not root_path.is_dir():
            warnings.append(f"Root path is not a directory: {self.root}")

        if self.special_file == self.secret_file:
            warnings.append(f"Displayed and transmitted files share the name {self.special_file}")

        if urlparse(self.endpoint).scheme == 'http' and not self.is_local_endpoint():
            warnings.append(f"Payload will be sent unencrypted to a remote host: {self.endpoint}")

        return warnings

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary representation."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CourierConfig':
        """Create configuration from dictionary."""
        return cls(**data)

    def __str__(self) -> str:
        """String representation of the configuration."""
        mode = "dry run" if self.dry_run else "live"
        return (f"CourierConfig(root={self.root}, special={self.special_file}, "
                f"secret={self.secret_file}, endpoint={self.endpoint}, {mode})")


def validate_config_dict(config_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate a raw configuration dictionary.

    Args:
        config_data: Configuration values, typically loaded from YAML

    Returns:
        The validated dictionary with normalized values

    Raises:
        ValueError: If any value is invalid or an unknown key is present
    """
    try:
        return CourierConfig(**config_data).to_dict()
    except ValidationError as e:
        messages = []
        for error in e.errors():
            location = '.'.join(str(part) for part in error['loc']) or 'config'
            messages.append(f"{location}: {error['msg']}")
        raise ValueError('; '.join(messages)) from e
