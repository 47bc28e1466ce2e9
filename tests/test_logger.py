import logging

import pytest

from bundler_gas.utils.logger import ROOT_LOGGER_NAME, configure_logging, get_logger


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    configure_logging("INFO")


def file_handlers():
    return [
        h for h in logging.getLogger(ROOT_LOGGER_NAME).handlers
        if isinstance(h, logging.FileHandler)
    ]


def test_module_loggers_share_one_console_handler():
    logger = get_logger("bundler_gas.core.client")
    assert logger.name == "bundler_gas.core.client"
    assert not logger.handlers
    assert len(logging.getLogger(ROOT_LOGGER_NAME).handlers) == 1


def test_foreign_names_are_nested():
    assert get_logger("scripts.check").name == "bundler_gas.scripts.check"


def test_level_and_file_from_config(tmp_path):
    log_path = tmp_path / "gas.log"
    configure_logging("DEBUG", str(log_path))

    get_logger("bundler_gas.core.gas.mean_fee").debug("Tip cap: node=2 batch_mean=7 ops=2")
    for handler in file_handlers():
        handler.flush()

    assert "Tip cap: node=2 batch_mean=7" in log_path.read_text()


def test_reconfigure_replaces_file_handler(tmp_path):
    configure_logging("INFO", str(tmp_path / "first.log"))
    configure_logging("WARNING", str(tmp_path / "second.log"))

    assert [h.baseFilename for h in file_handlers()] == [str(tmp_path / "second.log")]
    assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.WARNING

    configure_logging("INFO")
    assert file_handlers() == []


def test_debug_filtered_at_info(tmp_path):
    log_path = tmp_path / "gas.log"
    configure_logging("INFO", str(log_path))
    get_logger("bundler_gas.core.client").debug("hidden")
    get_logger("bundler_gas.core.client").info("shown")
    for handler in file_handlers():
        handler.flush()

    text = log_path.read_text()
    assert "shown" in text
    assert "hidden" not in text


def test_rejects_unknown_level():
    with pytest.raises(ValueError):
        configure_logging("VERBOSE")
