import argparse
from pathlib import Path
from unittest.mock import Mock

import pytest

from hyprdrop.config import Settings, coerce_to_bool, split_args
from hyprdrop.constants import DEFAULT_SETTLE_DELAY, LEDGER_FILE


def namespace(**kw):
    values = {"command": "kitty", "identifier": "drop", "args": None, "background": False, "debug": False, "focus": False}
    values.update(kw)
    return argparse.Namespace(**values)


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, True), ("", False), ("no", False), ("Off", False), ("0", False), ("yes", True), ("1", True), (False, False)],
)
def test_coerce_to_bool(value, expected):
    assert coerce_to_bool(value, default=True) is expected


def test_split_args():
    assert split_args(None) == []
    assert split_args("") == []
    assert split_args("btop") == ["btop"]
    assert split_args("-e,,btop") == ["-e", "btop"]


def test_defaults():
    settings = Settings.from_args(namespace(), environ={})
    assert settings.ledger_path == LEDGER_FILE
    assert settings.settle_delay == DEFAULT_SETTLE_DELAY
    assert settings.notify
    assert settings.special_target == "special:hyprdrop"


def test_environment():
    env = {"HYPRDROP_LEDGER": "/run/ledger", "HYPRDROP_SETTLE_DELAY": "1.5", "HYPRDROP_NOTIFY": "off"}
    settings = Settings.from_args(namespace(args="a,b", background=True), environ=env)
    assert settings.ledger_path == Path("/run/ledger")
    assert settings.settle_delay == 1.5
    assert not settings.notify
    assert settings.args == ["a", "b"]
    assert settings.background


def test_invalid_delay():
    log = Mock()
    settings = Settings.from_args(namespace(), environ={"HYPRDROP_SETTLE_DELAY": "soon"}, log=log)
    assert settings.settle_delay == DEFAULT_SETTLE_DELAY
    log.warning.assert_called_once()
