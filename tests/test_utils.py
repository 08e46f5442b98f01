"""Tests for configuration and logging utilities."""

from __future__ import annotations

import logging

import pytest
from omegaconf import OmegaConf
from rich.logging import RichHandler

from edgemotion.exceptions import ConfigurationError
from edgemotion.utils.config import (
    get_nested,
    load_adapter_config,
    load_config,
    save_config,
    to_dict,
    validate_config,
)
from edgemotion.utils.logging import (
    ContextLogger,
    get_logger,
    log_dict,
    setup_logging,
    setup_logging_from_config,
)


class TestConfig:
    """Tests for configuration loading."""

    def test_defaults(self):
        config = load_adapter_config()
        assert list(config.labels) == ["stationary", "pick_up"]
        assert config.codec.byte_order == "native"
        assert config.window.sampling_rate == 50

    def test_file_overrides_defaults(self, tmp_path):
        path = tmp_path / "adapter.yaml"
        path.write_text("model:\n  path: m.tflite\ncodec:\n  byte_order: big\n")
        config = load_adapter_config(path)
        assert config.model.path == "m.tflite"
        assert config.codec.byte_order == "big"
        assert list(config.labels) == ["stationary", "pick_up"]
        validate_config(config)

    def test_dotlist_overrides(self):
        config = load_adapter_config(overrides=["model.path=other.tflite", "window.overlap=0.25"])
        assert config.model.path == "other.tflite"
        assert config.window.overlap == 0.25

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config(tmp_path / "missing.yaml")

    def test_validate_missing_keys(self):
        with pytest.raises(ConfigurationError, match="model.path"):
            validate_config(load_adapter_config())

    def test_validate_absent_key(self):
        with pytest.raises(ConfigurationError, match="labels"):
            validate_config(OmegaConf.create({"model": {"path": "m.tflite"}}), ["labels"])

    def test_get_nested(self):
        config = load_adapter_config()
        assert get_nested(config, "window.size") == 1.5
        assert get_nested(config, "model.path", "fallback") == "fallback"
        assert get_nested(config, "no.such.key", 3) == 3

    def test_save_round_trip(self, tmp_path):
        config = load_adapter_config(overrides=["model.path=x.tflite"])
        path = tmp_path / "out" / "saved.yaml"
        save_config(config, path)
        assert to_dict(load_config(path)) == to_dict(config)

    def test_shipped_config_is_valid(self, request):
        path = request.config.rootpath / "configs" / "adapter.yaml"
        config = load_adapter_config(path)
        validate_config(config)
        assert config.model.path.endswith(".tflite")


class TestLogging:
    """Tests for logging setup."""

    @pytest.fixture(autouse=True)
    def reset_package_logger(self):
        yield
        logger = logging.getLogger("edgemotion")
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    def test_setup_logging_level(self):
        logger = setup_logging("DEBUG")
        assert logger.name == "edgemotion"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)

    def test_unknown_level_name_falls_back_to_info(self):
        assert setup_logging("chatty").level == logging.INFO

    def test_setup_logging_file(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        logger = setup_logging(logging.INFO, log_file=log_file)
        assert [type(h) for h in logger.handlers] == [RichHandler, logging.FileHandler]

        get_logger("tests").info("hello file")
        get_logger("tests").debug("below level")
        for handler in logger.handlers:
            handler.flush()
        text = log_file.read_text()
        assert "hello file" in text
        assert "edgemotion.tests" in text
        assert "below level" not in text

    def test_repeated_setup_replaces_handlers(self, tmp_path):
        setup_logging(log_file=tmp_path / "a.log")
        logger = setup_logging()
        assert len(logger.handlers) == 1

    def test_setup_from_config(self):
        config = load_adapter_config(overrides=["logging.level=WARNING", "logging.rich=false"])
        logger = setup_logging_from_config(config)
        assert logger.level == logging.WARNING
        assert type(logger.handlers[0]) is logging.StreamHandler

    def test_get_logger_namespace(self):
        assert get_logger().name == "edgemotion"
        assert get_logger("models.adapter").name == "edgemotion.models.adapter"

    def test_context_logger_prefix(self):
        adapter = ContextLogger(get_logger("tests"), {"model": "m.tflite"})
        msg, _ = adapter.process("loaded", {})
        assert msg == "[model=m.tflite] loaded"

    def test_context_logger_without_context(self):
        adapter = ContextLogger(get_logger("tests"), {})
        assert adapter.process("loaded", {})[0] == "loaded"

    def test_log_dict(self, caplog):
        logger = get_logger("tests")
        with caplog.at_level(logging.INFO, logger="edgemotion"):
            log_dict(logger, {"scale": 0.5, "zero_point": -3}, title="Input tensor")
        assert caplog.messages == ["Input tensor", "  scale: 0.5", "  zero_point: -3"]

    def test_log_dict_below_level(self, caplog):
        with caplog.at_level(logging.INFO, logger="edgemotion"):
            log_dict(get_logger("tests"), {"scale": 0.5}, level=logging.DEBUG)
        assert caplog.messages == []
