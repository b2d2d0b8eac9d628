import os
import sys
from importlib import metadata
from unittest.mock import MagicMock

from skaffold.settings import LoggingSettings, Settings
from skaffold.utils.structlog_configurator import (
    _add_static_context,
    _configure_handlers,
    _configure_processors,
    configure_structlog,
    get_logger,
    get_package_version,
    is_docker_environment,
)


class TestEnvironmentDetection:
    """Test environment detection functions."""

    def test_is_docker_environment__dockerenv(self, mocker):
        """Should return True when /.dockerenv exists."""
        mocker.patch("os.path.exists", return_value=True)
        assert is_docker_environment() is True

    def test_is_docker_environment__env_var(self, mocker):
        """Should return True when DOCKER_CONTAINER env var is set."""
        mocker.patch("os.path.exists", return_value=False)
        mocker.patch.dict(os.environ, {"DOCKER_CONTAINER": "true"})
        assert is_docker_environment() is True

    def test_is_docker_environment_false(self, mocker):
        """Should return False when no Docker indicators present."""
        mocker.patch("os.path.exists", return_value=False)
        mocker.patch.dict(os.environ, {}, clear=True)
        assert is_docker_environment() is False


class TestPackageVersion:
    """Test package version detection."""

    def test_get_package_version(self, mocker):
        """Should return the installed distribution version."""
        mocker.patch("importlib.metadata.version", return_value="1.2.3")
        assert get_package_version() == "1.2.3"

    def test_get_package_version_not_installed(self, mocker):
        """Should return 'unknown' when the distribution is not installed."""
        mocker.patch(
            "importlib.metadata.version",
            side_effect=metadata.PackageNotFoundError("skaffold-schema"),
        )
        assert get_package_version() == "unknown"


class TestStaticContextProcessor:
    """Test static context processor function."""

    def test_add_static_context_processor(self):
        """Should add extra fields to event dict."""
        extra_fields = {"service": "test", "version": "1.0"}
        processor = _add_static_context(extra_fields)

        event_dict = {"message": "test message"}
        result = processor(MagicMock(), "info", event_dict)

        assert result["service"] == "test"
        assert result["version"] == "1.0"
        assert result["message"] == "test message"


class TestProcessorConfiguration:
    """Test processor configuration logic."""

    def test_configure_processors_console(self, mocker):
        """Should end with ConsoleRenderer outside Docker."""
        mocker.patch(
            "skaffold.utils.structlog_configurator.get_package_version", return_value="1.0"
        )

        processors = _configure_processors(Settings(), is_docker=False)

        assert len(processors) >= 4
        assert "ConsoleRenderer" in str(type(processors[-1]))

    def test_configure_processors_json_in_docker(self, mocker):
        """Should auto-detect JSON output in Docker."""
        mocker.patch(
            "skaffold.utils.structlog_configurator.get_package_version", return_value="1.0"
        )

        processors = _configure_processors(Settings(), is_docker=True)

        assert "JSONRenderer" in str(type(processors[-1]))

    def test_configure_processors_json_forced_off(self, mocker):
        """Should honor an explicit json_logs setting."""
        mocker.patch(
            "skaffold.utils.structlog_configurator.get_package_version", return_value="1.0"
        )
        settings = Settings(logging=LoggingSettings(json_logs=False))

        processors = _configure_processors(settings, is_docker=True)

        assert "ConsoleRenderer" in str(type(processors[-1]))

    def test_configure_processors_caller(self, mocker):
        """Should add callsite information when requested."""
        mocker.patch(
            "skaffold.utils.structlog_configurator.get_package_version", return_value="1.0"
        )
        settings = Settings(logging=LoggingSettings(include_caller=True))

        processors = _configure_processors(settings, is_docker=False)

        assert any("CallsiteParameterAdder" in str(type(p)) for p in processors)


class TestHandlerConfiguration:
    """Test logging handler configuration."""

    def test_configure_handlers_console(self, mocker):
        """Should replace existing handlers with a single console handler."""
        mock_logger = mocker.patch("logging.getLogger")
        mock_root = MagicMock()
        old_handler = MagicMock()
        mock_logger.return_value = mock_root
        mock_root.handlers = [old_handler]

        _configure_handlers(Settings(logging=LoggingSettings(level="warning")))

        mock_root.removeHandler.assert_called_once_with(old_handler)
        mock_root.addHandler.assert_called_once()
        mock_root.setLevel.assert_called_once_with(30)

    def test_configure_handlers_plain_messages(self, mocker):
        """Should write standard-library records to stderr as bare messages."""
        mock_logger = mocker.patch("logging.getLogger")
        mock_root = MagicMock()
        mock_logger.return_value = mock_root
        mock_root.handlers = []

        _configure_handlers(Settings())

        (handler,) = mock_root.addHandler.call_args.args
        assert handler.stream is sys.stderr
        assert handler.formatter._fmt == "%(message)s"


class TestMainConfiguration:
    """Test main configuration function."""

    def test_configure_structlog(self, mocker):
        """Should configure structlog successfully."""
        mocker.patch(
            "skaffold.utils.structlog_configurator.is_docker_environment", return_value=False
        )
        mocker.patch("skaffold.utils.structlog_configurator._configure_processors", return_value=[])
        mock_configure = mocker.patch("structlog.configure")
        mocker.patch("skaffold.utils.structlog_configurator._configure_handlers")
        mock_get_logger = mocker.patch("structlog.get_logger")
        mock_logger = MagicMock()
        mock_get_logger.return_value = mock_logger

        configure_structlog(Settings())

        mock_configure.assert_called_once()
        mock_logger.debug.assert_called_once()

    def test_get_logger(self, mocker):
        """Should return structlog logger instance."""
        mock_structlog = mocker.patch("structlog.get_logger")
        mock_logger = MagicMock()
        mock_structlog.return_value = mock_logger

        result = get_logger("test")

        mock_structlog.assert_called_once_with("test")
        assert result == mock_logger
