from __future__ import annotations

import logging
import textwrap

import pytest

from caltrain_finder.config import DEFAULT_BASE_URL, AppConfig, LoggingConfig, load_config
from caltrain_finder.logging_setup import LOG_FILENAME, configure_logging


VALID_YAML = """
transit:
  agency: "CT"
  poll_interval_seconds: 60

stations:
  path: "stations.yaml"

logging:
  level: "INFO"
  log_dir: "logs/"
"""


def _write_yaml(tmp_path, contents: str) -> str:
    path = tmp_path / "config.yaml"
    path.write_text(textwrap.dedent(contents))
    return str(path)


def test_load_config_valid(tmp_path, monkeypatch) -> None:
    path = _write_yaml(tmp_path, VALID_YAML)

    monkeypatch.setenv("TRANSIT_API_KEY", "testkey")
    config = load_config(path)

    assert isinstance(config, AppConfig)
    assert config.transit.api_key == "testkey"
    assert config.transit.agency == "CT"
    assert config.transit.poll_interval_seconds == 60
    assert config.transit.base_url == DEFAULT_BASE_URL
    assert config.transit.timeout_seconds == 10
    assert config.stations.path == "stations.yaml"
    assert config.log.level == "INFO"


def test_load_config_stations_section_optional(tmp_path) -> None:
    yaml_text = """
    transit:
      agency: "CT"
      poll_interval_seconds: 30
      base_url: "http://localhost:9000/transit"
    logging:
      level: "DEBUG"
      log_dir: "logs/"
    """
    path = _write_yaml(tmp_path, yaml_text)

    config = load_config(path)

    assert config.stations.path is None
    assert config.transit.base_url == "http://localhost:9000/transit"


def test_load_config_missing_file(tmp_path) -> None:
    missing_path = tmp_path / "does_not_exist.yaml"

    with pytest.raises(ValueError):
        load_config(str(missing_path))


def test_load_config_missing_transit_section(tmp_path) -> None:
    yaml_text = """
    logging:
      level: "INFO"
      log_dir: "logs/"
    """
    path = _write_yaml(tmp_path, yaml_text)

    with pytest.raises(ValueError):
        load_config(path)


def test_load_config_missing_agency(tmp_path) -> None:
    yaml_text = """
    transit:
      poll_interval_seconds: 60
    logging:
      level: "INFO"
      log_dir: "logs/"
    """
    path = _write_yaml(tmp_path, yaml_text)

    with pytest.raises(ValueError) as exc_info:
        load_config(path)

    assert "agency" in str(exc_info.value)


def test_load_config_rejects_non_positive_interval(tmp_path) -> None:
    yaml_text = """
    transit:
      agency: "CT"
      poll_interval_seconds: 0
    logging:
      level: "INFO"
      log_dir: "logs/"
    """
    path = _write_yaml(tmp_path, yaml_text)

    with pytest.raises(ValueError):
        load_config(path)


def test_load_config_top_level_must_be_mapping(tmp_path) -> None:
    path = _write_yaml(tmp_path, "- just\n- a list\n")

    with pytest.raises(ValueError):
        load_config(path)


def test_configure_logging_writes_to_log_dir(tmp_path) -> None:
    log_dir = tmp_path / "logs"
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    try:
        log_path = configure_logging(LoggingConfig(level="debug", log_dir=str(log_dir)))
        logging.getLogger("caltrain_finder.test").debug("hello board")
        for handler in root.handlers:
            handler.flush()

        assert log_path == log_dir / LOG_FILENAME
        assert root.level == logging.DEBUG
        assert "hello board" in log_path.read_text(encoding="utf-8")
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)


def test_configure_logging_rejects_unknown_level(tmp_path) -> None:
    with pytest.raises(ValueError):
        configure_logging(LoggingConfig(level="LOUD", log_dir=str(tmp_path)))
