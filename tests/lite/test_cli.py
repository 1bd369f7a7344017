"""Tests for the hastatus command line entry."""

import pytest

import hastatus.__main__ as cli
from hastatus.config_loader import ConfigError

pytestmark = [pytest.mark.unit, pytest.mark.fast]


class TestCreateParser:
    """Test _create_parser()."""

    def test_parse_when_no_arguments_then_all_unset(self) -> None:
        # Act
        args = cli._create_parser().parse_args([])

        # Assert
        assert args.port is None
        assert args.host is None
        assert args.config is None

    def test_parse_when_options_then_port_is_int(self) -> None:
        # Act
        args = cli._create_parser().parse_args(["--port", "8080", "--host", "127.0.0.1", "--config", "ha.yaml"])

        # Assert
        assert args.port == 8080
        assert args.host == "127.0.0.1"
        assert args.config == "ha.yaml"

    def test_parse_when_port_not_int_then_exits(self) -> None:
        with pytest.raises(SystemExit):
            cli._create_parser().parse_args(["--port", "http"])


class TestMain:
    """Test main()."""

    def test_main_when_config_error_then_exit_2_with_message(self, monkeypatch, capsys) -> None:
        """Configuration problems exit with status 2 and a readable message."""

        # Arrange
        def _fail(args):
            raise ConfigError("HA_TOKEN is not set")

        monkeypatch.setattr(cli, "run_server", _fail)

        # Act
        with pytest.raises(SystemExit) as exc_info:
            cli.main([])

        # Assert
        assert exc_info.value.code == 2
        assert "HA_TOKEN is not set" in capsys.readouterr().err

    def test_main_when_server_returns_then_exit_0(self, monkeypatch) -> None:
        # Arrange
        seen = []
        monkeypatch.setattr(cli, "run_server", seen.append)

        # Act
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--port", "4000"])

        # Assert
        assert exc_info.value.code == 0
        assert seen[0].port == 4000
