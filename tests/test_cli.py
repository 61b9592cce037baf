import logging
from types import SimpleNamespace

import pytest

from events_feed import cli
from events_feed.config import AppConfig, LoggingConfig
from events_feed.models import FetchError
from events_feed.output import OutputError


def test_configure_logging_defaults_to_console_only(restore_root_logging):
    cli.configure_logging("INFO")

    handlers = restore_root_logging.handlers
    assert any(isinstance(handler, logging.StreamHandler) for handler in handlers)
    assert not any(isinstance(handler, logging.FileHandler) for handler in handlers)


def test_configure_logging_with_log_file_creates_file_handler(restore_root_logging, tmp_path):
    log_path = tmp_path / "logs" / "custom.log"
    cli.configure_logging("INFO", str(log_path))

    assert log_path.exists()
    assert any(
        isinstance(handler, logging.FileHandler) for handler in restore_root_logging.handlers
    )


def test_configure_logging_rejects_unknown_level():
    with pytest.raises(ValueError):
        cli.configure_logging("CHATTY")


def _fake_result(text="# header\nAll: []\n", written_to=None):
    return SimpleNamespace(output_text=text, feed=None, written_to=written_to)


def test_main_prints_document(monkeypatch, capsys):
    monkeypatch.setattr(cli, "configure_logging", lambda level, log_file=None: None)
    captured = {}

    def fake_execute(config):
        captured["config"] = config
        return _fake_result()

    monkeypatch.setattr(cli, "execute", fake_execute)

    exit_code = cli.main([])

    assert exit_code == 0
    assert capsys.readouterr().out == "# header\nAll: []\n"
    assert captured["config"].output_path is None


def test_main_uses_config_file_values(monkeypatch, capsys):
    monkeypatch.setattr(cli, "configure_logging", lambda level, log_file=None: None)
    app_config = AppConfig(
        api_base_url="https://api.meetup.test",
        site_url="https://meetup.test",
        timeout=7.0,
        output="/tmp/events.yaml",
    )
    monkeypatch.setattr(cli, "parse_app_config", lambda path: app_config)
    captured = {}

    def fake_execute(config):
        captured["config"] = config
        return _fake_result(written_to=config.output_path)

    monkeypatch.setattr(cli, "execute", fake_execute)

    exit_code = cli.main(["--config", "configs/test.xml"])

    assert exit_code == 0
    config = captured["config"]
    assert config.api_base_url == "https://api.meetup.test"
    assert config.site_url == "https://meetup.test"
    assert config.timeout == 7.0
    assert config.output_path == "/tmp/events.yaml"
    assert capsys.readouterr().out == ""


def test_main_cli_overrides_logging_and_output(monkeypatch):
    captured = {}

    def fake_configure(level, log_file=None):
        captured["level"] = level
        captured["file"] = log_file

    monkeypatch.setattr(cli, "configure_logging", fake_configure)
    monkeypatch.setattr(
        cli,
        "parse_app_config",
        lambda path: AppConfig(
            output="config.yaml", logging=LoggingConfig(level="INFO", file="config.log")
        ),
    )

    def fake_execute(config):
        captured["output"] = config.output_path
        return _fake_result(written_to=config.output_path)

    monkeypatch.setattr(cli, "execute", fake_execute)

    cli.main(
        [
            "--config",
            "c.xml",
            "--log-level",
            "DEBUG",
            "--log-file",
            "cli.log",
            "--output",
            "cli.yaml",
        ]
    )

    assert captured == {"level": "DEBUG", "file": "cli.log", "output": "cli.yaml"}


@pytest.mark.parametrize(
    "error",
    [
        FetchError("failed to fetch events: 500 Internal Server Error", fatal=True),
        OutputError("failed to encode event yaml"),
    ],
)
def test_main_fatal_errors_exit_non_zero_without_output(monkeypatch, capsys, error):
    monkeypatch.setattr(cli, "configure_logging", lambda level, log_file=None: None)

    def failing_execute(config):
        raise error

    monkeypatch.setattr(cli, "execute", failing_execute)

    assert cli.main([]) == 1
    assert capsys.readouterr().out == ""


def test_main_missing_config_file_exits_non_zero(tmp_path, capsys):
    assert cli.main(["--config", str(tmp_path / "missing.xml")]) == 1
    assert capsys.readouterr().out == ""


def test_main_invalid_log_level_is_usage_error(monkeypatch):
    monkeypatch.setattr(cli, "execute", lambda config: _fake_result())

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--log-level", "CHATTY"])

    assert excinfo.value.code == 2


def test_main_runtime_value_error_exits_one_not_usage(monkeypatch, capsys):
    monkeypatch.setattr(cli, "configure_logging", lambda level, log_file=None: None)

    def failing_execute(config):
        raise ValueError("year 31690708 is out of range")

    monkeypatch.setattr(cli, "execute", failing_execute)

    assert cli.main([]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "usage:" not in captured.err
