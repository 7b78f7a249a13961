"""
Tests for logging setup.
"""

import logging

from bank_ledger.logging_config import setup_logging


def test_setup_logging_is_idempotent():
    logger = setup_logging("DEBUG")
    setup_logging("DEBUG")

    assert logger.name == "bank_ledger"
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG


def test_unknown_level_falls_back_to_info():
    logger = setup_logging("LOUD")
    assert logger.level == logging.INFO
