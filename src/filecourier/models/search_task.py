"""
Search task data model for File Courier.

A SearchTask pairs the directory a traversal starts from with the exact
filename it is looking for.
"""

from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field, field_validator


class SearchTask(BaseModel):
    """
    Immutable input to a single locator traversal.

    Attributes:
        root: Directory the traversal starts from (need not exist)
        target_name: Exact, case-sensitive filename to look for
    """

    model_config = ConfigDict(frozen=True)

    root: str = Field(..., description="Directory the traversal starts from")
    target_name: str = Field(..., min_length=1, description="Exact filename to locate")

    @field_validator('root')
    @classmethod
    def validate_root(cls, v: str) -> str:
        """Expand the user directory but leave the rest of the path untouched."""
        if not v or not v.strip():
            raise ValueError("Search root cannot be empty")
        return str(Path(v).expanduser())

    @field_validator('target_name')
    @classmethod
    def validate_target_name(cls, v: str) -> str:
        """Target must be a bare filename, not a path."""
        return validate_bare_filename(v)

    def root_path(self) -> Path:
        """Get the search root as a Path."""
        return Path(self.root)

    def __str__(self) -> str:
        return f"SearchTask('{self.target_name}' under {self.root})"


def validate_bare_filename(name: str) -> str:
    """
    Check that a name can be matched against a single directory entry.

    Args:
        name: Candidate filename

    Returns:
        The unchanged name

    Raises:
        ValueError: If the name is empty, a dot entry, or contains a separator
    """
    if not name:
        raise ValueError("Filename cannot be empty")
    if name in ('.', '..'):
        raise ValueError(f"Invalid filename: {name}")
    if '/' in name or '\\' in name:
        raise ValueError(f"Filename must not contain a path separator: {name}")
    return name
