"""
HTTP transmitter for File Courier.

Sends a payload as the "message" field of a JSON object in a single POST
request. There is no retry and no timeout beyond the requests default.
"""

from typing import Any, Dict, Optional
import logging

import requests

from ..errors import PayloadDecodeError, TransmitError
from ..models.config import DEFAULT_ENDPOINT, DEFAULT_SOURCE_LINK


logger = logging.getLogger(__name__)


class Transmitter:
    """
    Posts UTF-8 payloads to a fixed endpoint.

    Attributes:
        endpoint: URL every request is sent to
        source_link: Value of the "github link" field of every request body
        dry_run: When True, requests are built and logged but never sent
    """

    def __init__(self, endpoint: str = DEFAULT_ENDPOINT, source_link: str = DEFAULT_SOURCE_LINK,
                 dry_run: bool = False):
        self.endpoint = endpoint
        self.source_link = source_link
        self.dry_run = dry_run

    def build_body(self, message: str) -> Dict[str, Any]:
        """Build the JSON body for a decoded message."""
        return {
            "message": message,
            "github link": self.source_link
        }

    def send(self, data: bytes) -> None:
        """
        Send a payload to the endpoint.

        Args:
            data: Raw payload bytes; must be valid UTF-8

        Raises:
            PayloadDecodeError: If data is not valid UTF-8 (nothing is sent)
            TransmitError: If the request fails or the response is not 2xx
        """
        try:
            message = data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise PayloadDecodeError(str(e)) from e

        body = self.build_body(message)

        if self.dry_run:
            logger.info(f"Dry run: would post {len(data)} bytes to {self.endpoint}")
            return

        logger.info(f"Posting {len(data)} bytes to {self.endpoint}")
        try:
            response = requests.post(self.endpoint, json=body)
        except requests.RequestException as e:
            raise TransmitError(str(e)) from e

        status = response.status_code
        if not 200 <= status < 300:
            reason = f" {response.reason}" if response.reason else ""
            raise TransmitError(f"{self.endpoint} responded with status {status}{reason}", status_code=status)

        logger.debug(f"Endpoint accepted payload with status {status}")


def send_to_remote_server(data: bytes, endpoint: Optional[str] = None) -> None:
    """
    Convenience function to send a payload with default settings.

    Args:
        data: Raw payload bytes
        endpoint: Endpoint override (defaults to the configured default)

    Raises:
        PayloadDecodeError: If data is not valid UTF-8
        TransmitError: If the request fails
    """
    Transmitter(endpoint=endpoint or DEFAULT_ENDPOINT).send(data)
