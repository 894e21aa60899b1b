from unittest.mock import AsyncMock, Mock

import pytest

from hyprdrop import command
from hyprdrop.models import Exec, ExitCode, HyprdropError, PlacementState
from hyprdrop.planner import ToggleOutcome


@pytest.fixture
def under_hyprland(mocker):
    return mocker.patch("hyprdrop.command.get_control_socket", return_value="/tmp/hypr/sig/.socket.sock")


def run_main(argv):
    with pytest.raises(SystemExit) as exc:
        command.main(argv)
    return exc.value.code


def test_parser():
    ns = command.get_parser().parse_args(["kitty", "-i", "drop", "-a", "btop,-u,1", "-b"])
    assert ns.command == "kitty"
    assert ns.identifier == "drop"
    assert ns.args == "btop,-u,1"
    assert ns.background
    assert not ns.debug
    assert not ns.focus


def test_identifier_is_required(capsys):
    assert run_main(["kitty"]) == 2
    assert "--identifier" in capsys.readouterr().err


def test_success(mocker, under_hyprland):
    run = mocker.patch("hyprdrop.command.run", new=AsyncMock(return_value=ToggleOutcome(PlacementState.ABSENT, [Exec("kitty")])))
    assert run_main(["kitty", "-i", "drop", "-a", "btop,-u,1"]) == ExitCode.SUCCESS
    settings = run.await_args.args[0]
    assert settings.args == ["btop", "-u", "1"]


def test_failed_step_sets_exit_code(mocker, under_hyprland):
    op = Exec("kitty")
    mocker.patch("hyprdrop.command.run", new=AsyncMock(return_value=ToggleOutcome(PlacementState.ABSENT, [op], failed=[op])))
    assert run_main(["kitty", "-i", "drop"]) == ExitCode.COMMAND_ERROR


def test_compositor_unreachable(mocker, under_hyprland):
    mocker.patch("hyprdrop.command.run", new=AsyncMock(side_effect=HyprdropError))
    assert run_main(["kitty", "-i", "drop"]) == ExitCode.CONNECTION_ERROR


def test_connection_reset_exits_with_connection_error(mocker, under_hyprland):
    mocker.patch("hyprdrop.ipc.get_control_socket", return_value="/tmp/hypr/sig/.socket.sock")
    reader = AsyncMock()
    reader.read.side_effect = ConnectionResetError
    writer = Mock()
    writer.drain = AsyncMock()
    writer.wait_closed = AsyncMock()
    mocker.patch("asyncio.open_unix_connection", return_value=(reader, writer))

    assert run_main(["kitty", "-i", "drop"]) == ExitCode.CONNECTION_ERROR


def test_not_under_hyprland(mocker):
    mocker.patch("hyprdrop.command.get_control_socket", return_value=None)
    run = mocker.patch("hyprdrop.command.run", new=AsyncMock())
    assert run_main(["kitty", "-i", "drop"]) == ExitCode.ENV_ERROR
    run.assert_not_called()


def test_empty_identifier(under_hyprland):
    assert run_main(["kitty", "-i", " "]) == ExitCode.USAGE_ERROR


def test_print_completion(capsys):
    assert run_main(["--print-completion", "bash"]) == 0
    assert "hyprdrop" in capsys.readouterr().out
