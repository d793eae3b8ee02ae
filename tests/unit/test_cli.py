"""Unit tests for the interactive shell commands."""

import pytest

from cartsync import CartApp
from cartsync.cli import CommandError, build_parser, handle_command, main, resolve_settings


@pytest.fixture
def shell_app(store, offline_client):
    # Not mounted: commands only touch the store
    return CartApp(store, offline_client)


@pytest.mark.unit
def test_add_and_remove_commands_update_cart(shell_app, store):
    assert handle_command(shell_app, "add p1") is True
    assert handle_command(shell_app, "ADD p1") is True
    assert handle_command(shell_app, "remove p1") is True

    assert store.get_state().cart.total_quantity == 1


@pytest.mark.unit
def test_toggle_command_flips_cart_visibility(shell_app, store):
    handle_command(shell_app, "toggle")

    assert store.get_state().ui.cart_is_visible is True


@pytest.mark.unit
@pytest.mark.parametrize("line", ["quit", "exit", "q"])
def test_quit_commands_stop_the_shell(shell_app, line):
    assert handle_command(shell_app, line) is False


@pytest.mark.unit
@pytest.mark.parametrize("line", ["", "   ", "help", "products"])
def test_informational_commands_leave_state_alone(shell_app, store, line):
    before = store.get_state()

    assert handle_command(shell_app, line) is True
    assert store.get_state() == before


@pytest.mark.unit
@pytest.mark.parametrize(
    "line, message",
    [
        ("add", "usage: add <product-id>"),
        ("add p9", "unknown product: p9"),
        ("checkout", "unknown command: checkout"),
    ],
)
def test_bad_commands_raise_command_error(shell_app, line, message):
    with pytest.raises(CommandError, match=message):
        handle_command(shell_app, line)


@pytest.mark.unit
def test_parser_accepts_overrides():
    args = build_parser().parse_args(["--base-url", "https://x.example.com", "--log-level", "info"])

    assert args.base_url == "https://x.example.com"
    assert args.log_level == "info"


@pytest.fixture
def no_env_settings(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for key in ("CARTSYNC_BASE_URL", "CARTSYNC_TIMEOUT", "CARTSYNC_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)


@pytest.mark.unit
def test_resolve_settings_applies_overrides(no_env_settings):
    args = build_parser().parse_args(["--base-url", "https://x.example.com/", "--log-level", "info"])

    settings = resolve_settings(args)

    assert settings.base_url == "https://x.example.com"
    assert settings.log_level == "INFO"


@pytest.mark.unit
def test_resolve_settings_rejects_unknown_log_level(no_env_settings):
    args = build_parser().parse_args(["--log-level", "verbose"])

    with pytest.raises(ValueError, match="--log-level"):
        resolve_settings(args)


@pytest.mark.unit
def test_main_reports_unknown_log_level_as_usage_error(no_env_settings, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--log-level", "verbose"])

    assert excinfo.value.code == 2
    assert "--log-level must be a logging level name" in capsys.readouterr().err
