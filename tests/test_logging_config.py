import logging

from pixelgrid.logging_config import setup_logging


def test_setup_logging_does_not_stack_handlers(tmp_path):
    log_file = tmp_path / "pixelgrid.log"
    setup_logging("DEBUG", str(log_file))
    logger = setup_logging("DEBUG", str(log_file))

    assert logger.name == "pixelgrid"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


def test_setup_logging_unknown_level_name_falls_back_to_info():
    logger = setup_logging("chatty")
    assert logger.level == logging.INFO
    logger.handlers.clear()
