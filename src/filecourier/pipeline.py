"""
Locate, read and transmit pipeline for File Courier.

The run is strictly sequential: locate the special file, locate the secret
file, read both, then hand the secret bytes to the transmitter. Locating and
reading failures abort the run. A failed transmission is recorded on the
result and the run still completes.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import logging

from .errors import FileReadError, PayloadDecodeError, TargetNotFoundError, TransmitError
from .models.config import CourierConfig
from .models.search_task import SearchTask
from .tools.locator import Locator
from .tools.transmitter import Transmitter


logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """
    Outcome of a completed courier run.

    Attributes:
        special_path: Where the displayed file was found
        special_text: Full text of the displayed file
        secret_path: Where the transmitted file was found
        payload_size: Number of bytes handed to the transmitter
        sent: Whether the transmitter reported success
        send_error: Description of the transmission failure, if any
        dry_run: Whether the request was built without being sent
    """
    special_path: Path
    special_text: str
    secret_path: Path
    payload_size: int
    sent: bool
    send_error: Optional[str] = None
    dry_run: bool = False


class CourierPipeline:
    """Runs one locate/read/transmit pass for a configuration."""

    def __init__(self, config: CourierConfig, locator: Optional[Locator] = None,
                 transmitter: Optional[Transmitter] = None):
        self.config = config
        self.locator = locator or Locator()
        self.transmitter = transmitter or Transmitter(
            endpoint=config.endpoint,
            source_link=config.source_link,
            dry_run=config.dry_run
        )

    def run(self) -> RunResult:
        """
        Execute the pipeline.

        Returns:
            RunResult describing what was read and whether it was sent

        Raises:
            TargetNotFoundError: If either file is missing from the tree
            FileReadError: If a located file cannot be read
            PayloadDecodeError: If the special file is not valid UTF-8
        """
        special_path = self.locate(self.config.special_task())
        secret_path = self.locate(self.config.secret_task())

        special_text = read_text(special_path)
        payload = read_bytes(secret_path)

        result = RunResult(
            special_path=special_path,
            special_text=special_text,
            secret_path=secret_path,
            payload_size=len(payload),
            sent=False,
            dry_run=self.config.dry_run
        )

        try:
            self.transmitter.send(payload)
        except (PayloadDecodeError, TransmitError) as e:
            logger.warning(f"Transmission of {secret_path} failed: {e}")
            result.send_error = str(e)
        else:
            result.sent = not self.config.dry_run

        return result

    def locate(self, task: SearchTask) -> Path:
        """
        Locate a task's target or fail.

        Raises:
            TargetNotFoundError: If the traversal finds no match
        """
        path = self.locator.locate(task)
        if path is None:
            raise TargetNotFoundError(task.target_name, task.root)
        return path


def read_text(path: Path) -> str:
    """
    Read a whole file as UTF-8 text.

    Raises:
        FileReadError: If the file cannot be read
        PayloadDecodeError: If the contents are not valid UTF-8
    """
    data = read_bytes(path)
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError as e:
        raise PayloadDecodeError(str(e), path=path) from e


def read_bytes(path: Path) -> bytes:
    """
    Read a whole file as bytes.

    Raises:
        FileReadError: If the file cannot be read
    """
    try:
        return path.read_bytes()
    except OSError as e:
        raise FileReadError(path, e.strerror or str(e)) from e


def run_courier(config: CourierConfig) -> RunResult:
    """Convenience function to run the pipeline with default collaborators."""
    return CourierPipeline(config).run()
