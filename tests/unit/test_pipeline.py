"""
Unit tests for the locate/read/transmit pipeline.

Covers the end-to-end scenarios: both files present, a missing file, and an
unreachable endpoint, plus the fatal and non-fatal decoding paths.
"""

from pathlib import Path
from unittest.mock import patch, MagicMock
import pytest
import requests

from filecourier.errors import FileReadError, PayloadDecodeError, TargetNotFoundError
from filecourier.models.config import CourierConfig
from filecourier.pipeline import CourierPipeline, RunResult, read_bytes, read_text, run_courier
from filecourier.tools.locator import Locator
from filecourier.tools.transmitter import Transmitter


def ok_response():
    response = MagicMock()
    response.status_code = 200
    response.reason = "OK"
    return response


@pytest.fixture
def tree(tmp_path):
    """Tree with /a/special_file.txt and /b/c/secret_file.txt."""
    special = tmp_path / "a" / "special_file.txt"
    secret = tmp_path / "b" / "c" / "secret_file.txt"
    special.parent.mkdir(parents=True)
    secret.parent.mkdir(parents=True)
    special.write_text("hello", encoding='utf-8')
    secret.write_text("topsecret", encoding='utf-8')
    return tmp_path


class TestCourierPipeline:
    """Test cases for CourierPipeline.run()."""

    @patch('filecourier.tools.transmitter.requests.post')
    def test_both_files_present(self, mock_post, tree):
        """Special text is returned and the secret is posted once."""
        mock_post.return_value = ok_response()
        config = CourierConfig(root=str(tree), endpoint="http://127.0.0.1:8000")

        result = CourierPipeline(config).run()

        assert isinstance(result, RunResult)
        assert result.special_text == "hello"
        assert result.special_path == tree / "a" / "special_file.txt"
        assert result.secret_path == tree / "b" / "c" / "secret_file.txt"
        assert result.payload_size == len(b"topsecret")
        assert result.sent is True
        assert result.send_error is None

        assert mock_post.call_count == 1
        assert mock_post.call_args.args[0] == "http://127.0.0.1:8000"
        assert mock_post.call_args.kwargs['json']['message'] == "topsecret"

    @patch('filecourier.tools.transmitter.requests.post')
    def test_special_file_missing(self, mock_post, tree):
        """A missing special file aborts before any request."""
        (tree / "a" / "special_file.txt").unlink()
        config = CourierConfig(root=str(tree))

        with pytest.raises(TargetNotFoundError, match="special_file.txt") as exc_info:
            CourierPipeline(config).run()

        assert exc_info.value.name == "special_file.txt"
        assert mock_post.call_count == 0

    @patch('filecourier.tools.transmitter.requests.post')
    def test_secret_file_missing(self, mock_post, tree):
        (tree / "b" / "c" / "secret_file.txt").unlink()
        config = CourierConfig(root=str(tree))

        with pytest.raises(TargetNotFoundError, match="secret_file.txt"):
            CourierPipeline(config).run()

        assert mock_post.call_count == 0

    @patch('filecourier.tools.transmitter.requests.post')
    def test_unreachable_endpoint_is_not_fatal(self, mock_post, tree):
        """A failed post is recorded on the result instead of raised."""
        mock_post.side_effect = requests.ConnectionError("Connection refused")
        config = CourierConfig(root=str(tree))

        result = CourierPipeline(config).run()

        assert result.special_text == "hello"
        assert result.sent is False
        assert "Connection refused" in result.send_error
        assert mock_post.call_count == 1

    @patch('filecourier.tools.transmitter.requests.post')
    def test_special_file_not_text_is_fatal(self, mock_post, tree):
        (tree / "a" / "special_file.txt").write_bytes(b"\xff\xfe\xfa")
        config = CourierConfig(root=str(tree))

        with pytest.raises(PayloadDecodeError) as exc_info:
            CourierPipeline(config).run()

        assert exc_info.value.path == str(tree / "a" / "special_file.txt")
        assert mock_post.call_count == 0

    @patch('filecourier.tools.transmitter.requests.post')
    def test_secret_file_not_text_is_not_fatal(self, mock_post, tree):
        """An undecodable payload is reported as a failed send with no request."""
        (tree / "b" / "c" / "secret_file.txt").write_bytes(b"\x80\x81")
        config = CourierConfig(root=str(tree))

        result = CourierPipeline(config).run()

        assert result.sent is False
        assert result.send_error.startswith("Decode Error")
        assert mock_post.call_count == 0

    @patch('filecourier.tools.transmitter.requests.post')
    def test_dry_run(self, mock_post, tree):
        config = CourierConfig(root=str(tree), dry_run=True)

        result = CourierPipeline(config).run()

        assert result.dry_run is True
        assert result.sent is False
        assert result.send_error is None
        mock_post.assert_not_called()

    def test_custom_names(self, tree):
        (tree / "b" / "report.log").write_text("log text")
        (tree / "upload.bin").write_text("upload me")
        transmitter = MagicMock(spec=Transmitter)
        config = CourierConfig(root=str(tree), special_file="report.log", secret_file="upload.bin")

        result = CourierPipeline(config, transmitter=transmitter).run()

        assert result.special_text == "log text"
        transmitter.send.assert_called_once_with(b"upload me")

    def test_uses_injected_locator(self, tree):
        locator = Locator()
        transmitter = MagicMock(spec=Transmitter)
        pipeline = CourierPipeline(CourierConfig(root=str(tree)), locator=locator, transmitter=transmitter)

        pipeline.run()

        assert pipeline.locator is locator
        assert locator.get_stats()['directories_traversed'] >= 1

    def test_default_transmitter_follows_config(self, tree):
        config = CourierConfig(root=str(tree), endpoint="http://localhost:1234/x",
                               source_link="https://example.org", dry_run=True)
        pipeline = CourierPipeline(config)

        assert pipeline.transmitter.endpoint == "http://localhost:1234/x"
        assert pipeline.transmitter.source_link == "https://example.org"
        assert pipeline.transmitter.dry_run is True

    @patch('filecourier.tools.transmitter.requests.post')
    def test_run_courier(self, mock_post, tree):
        mock_post.return_value = ok_response()

        result = run_courier(CourierConfig(root=str(tree)))

        assert result.sent is True
        assert mock_post.call_count == 1


class TestReadStage:
    """Test cases for the file reading helpers."""

    def test_read_text_exact(self, tmp_path):
        path = tmp_path / "f.txt"
        path.write_bytes("line one\r\nline two\né".encode('utf-8'))
        assert read_text(path) == "line one\r\nline two\né"

    def test_read_bytes(self, tmp_path):
        path = tmp_path / "f.bin"
        path.write_bytes(b"\x00\x01\xff")
        assert read_bytes(path) == b"\x00\x01\xff"

    def test_read_missing_file(self, tmp_path):
        with pytest.raises(FileReadError) as exc_info:
            read_bytes(tmp_path / "gone.txt")
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_read_text_missing_file(self, tmp_path):
        with pytest.raises(FileReadError):
            read_text(Path(tmp_path / "gone.txt"))

    def test_read_failure_after_locating_is_fatal(self, tree):
        transmitter = MagicMock(spec=Transmitter)
        config = CourierConfig(root=str(tree))

        with patch('filecourier.pipeline.Path.read_bytes', side_effect=PermissionError(13, "Permission denied")):
            with pytest.raises(FileReadError, match="Permission denied"):
                CourierPipeline(config, transmitter=transmitter).run()

        transmitter.send.assert_not_called()
