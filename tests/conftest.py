"generic fixtures"
import logging

import pytest

from hyprdrop.ledger import AddressLedger, MemoryLedgerStore
from hyprdrop.models import LiveClient, WorkspaceState

from .testtools import FakeBackend


def pytest_configure():
    "Runs once before all"
    from hyprdrop.logging_setup import init_logger

    init_logger("/dev/null", force_debug=True)


@pytest.fixture
def test_log():
    """Provide a silent logger for tests."""
    logger = logging.getLogger("test_hyprdrop")
    logger.handlers.clear()
    logger.addHandler(logging.NullHandler())
    logger.propagate = False
    logger.setLevel(logging.DEBUG)
    return logger


@pytest.fixture
def memory_ledger(test_log):
    return AddressLedger(MemoryLedgerStore(), test_log)


@pytest.fixture
def backend():
    return FakeBackend()


def make_client(address="0x5600aaaa", klass="kitty", title="~", initial_title="", ws_id=1, ws_name=None):
    "Build a LiveClient with sensible defaults"
    return LiveClient(
        address=address,
        klass=klass,
        title=title,
        initial_title=initial_title or title,
        workspace=WorkspaceState(ws_id, ws_name if ws_name is not None else str(ws_id)),
    )
