"""Unit tests for settings.errors module."""

import pytest

from src.cli.errors import CLIError, InputError
from src.settings.errors import ConfigError, FilesystemError, ReviewError


class TestReviewError:
    """Test cases for the base exception."""

    def test_all_errors_share_base(self):
        """Every error type can be caught as ReviewError."""
        for error in (
            ConfigError("bad"),
            FilesystemError("/tmp/x", "read"),
            InputError("bad"),
        ):
            assert isinstance(error, ReviewError)

    def test_cli_errors_are_cli_errors(self):
        """InputError belongs to the CLI branch."""
        assert issubclass(InputError, CLIError)


class TestFilesystemError:
    """Test cases for FilesystemError."""

    def test_message_with_reason(self):
        """Message includes operation, path and reason."""
        error = FilesystemError("/data/post.html", "write", "Permission denied")

        assert str(error) == (
            "Filesystem operation 'write' failed for /data/post.html: Permission denied"
        )
        assert error.file_path == "/data/post.html"
        assert error.operation == "write"
        assert error.reason == "Permission denied"

    def test_message_without_reason(self):
        """Reason is optional."""
        error = FilesystemError("/data/post.html", "read")

        assert str(error) == "Filesystem operation 'read' failed for /data/post.html"
        assert error.reason is None


class TestConfigError:
    """Test cases for ConfigError."""

    def test_message_with_field(self):
        """The offending field is named in the message."""
        error = ConfigError("Must be a boolean, got str", config_field="detector.highlight_short_blocks")

        assert str(error) == (
            "Configuration error in field 'detector.highlight_short_blocks': "
            "Must be a boolean, got str"
        )
        assert error.original_message == "Must be a boolean, got str"

    def test_message_without_field(self):
        """Errors that are not about one field have a plain prefix."""
        error = ConfigError("Invalid YAML syntax")

        assert str(error) == "Configuration error: Invalid YAML syntax"
        assert error.config_field is None

    def test_can_be_raised_and_caught(self):
        """ConfigError propagates like any exception."""
        with pytest.raises(ReviewError):
            raise ConfigError("broken")


class TestInputError:
    """Test cases for InputError."""

    def test_message_with_argument(self):
        """The offending argument is named in the message."""
        error = InputError("only one input can be read from stdin", argument="revised")

        assert str(error) == "Invalid input for 'revised': only one input can be read from stdin"
        assert error.argument == "revised"

    def test_message_without_argument(self):
        """Argument is optional."""
        assert str(InputError("empty")) == "Invalid input: empty"
