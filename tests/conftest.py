"""Pytest configuration.

Puts the project root on ``sys.path`` so ``import robackup`` works from any
working directory, and provides a single QCoreApplication for the tests that
drive QProcess through the Qt event loop.
"""

import os
import sys
import time

import pytest

# Project root = parent directory of this tests/ folder
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtCore import QCoreApplication

    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def wait_until(qapp):
    """Spin the Qt event loop until ``predicate()`` is true or fail after ``timeout`` seconds."""

    def _wait(predicate, timeout: float = 15.0):
        deadline = time.monotonic() + timeout
        while not predicate():
            if time.monotonic() > deadline:
                raise AssertionError("condition not met before timeout")
            qapp.processEvents()
            time.sleep(0.01)

    return _wait
