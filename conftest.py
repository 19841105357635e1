"""
Shared pytest fixtures.

Structured loggers attach a StreamHandler bound to sys.stderr as it is when
the logger is first created. pytest swaps sys.stderr per test, so handlers
are dropped after every test and the next logger binds the current stream.
"""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_structured_loggers():
    yield
    for name, logger in list(logging.Logger.manager.loggerDict.items()):
        if name.startswith("polyarea.") and isinstance(logger, logging.Logger):
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
