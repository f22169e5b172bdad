"""Test the centralized logging functionality."""

import logging
from io import StringIO

from topoengine.log_config import get_logger, set_global_log_level


def test_set_global_log_level():
    """Test that set_global_log_level configures logging properly."""
    set_global_log_level(logging.WARNING)
    engine_logger = logging.getLogger("topoengine")
    assert engine_logger.level == logging.WARNING

    set_global_log_level(logging.DEBUG)
    engine_logger = logging.getLogger("topoengine")
    assert engine_logger.level == logging.DEBUG

    set_global_log_level(logging.INFO)
    engine_logger = logging.getLogger("topoengine")
    assert engine_logger.level == logging.INFO


def test_logger_hierarchy():
    """Test that child loggers inherit from parent."""
    set_global_log_level(logging.WARNING)

    child_logger = get_logger("topoengine.generators.grid")

    assert child_logger.getEffectiveLevel() == logging.WARNING


def test_generator_debug_output():
    """Generators report node and edge counts at DEBUG level."""
    from topoengine.generators import generate
    from topoengine.params import MeshParams

    logger = get_logger("topoengine.generators.grid")
    log_capture = StringIO()
    handler = logging.StreamHandler(log_capture)
    handler.setLevel(logging.DEBUG)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        generate(MeshParams(size=3, dims=2))
    finally:
        logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)

    log_output = log_capture.getvalue()
    assert "9 nodes" in log_output
    assert "12 edges" in log_output
