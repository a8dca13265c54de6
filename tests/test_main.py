"""Entry point: CLI overlay, listener binding and startup failure handling."""

from __future__ import annotations

import socket
from collections.abc import Iterator
from pathlib import Path
from typing import Any, Callable

import pytest
from pydantic import ValidationError

from rehost import main as entry
from rehost.domain.exceptions import BindError
from rehost.infrastructure.config import Settings, get_settings
from rehost.infrastructure.listener import bind_socket


def test_cli_defaults_come_from_settings() -> None:
    args = entry.build_parser().parse_args(["site.toml"])
    settings = entry.resolve_settings(args, Settings())

    assert args.config == "site.toml"
    assert settings.host == "0.0.0.0"
    assert settings.port == 8000
    assert settings.override is False


def test_cli_flags_override_settings() -> None:
    args = entry.build_parser().parse_args(
        ["site.toml", "-H", "127.0.0.1", "-p", "9000", "-o", "--log-level", "debug"]
    )
    settings = entry.resolve_settings(args, Settings())

    assert settings.host == "127.0.0.1"
    assert settings.port == 9000
    assert settings.override is True
    assert settings.log_level == "DEBUG"


def test_env_settings_are_used_when_flags_absent(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REHOST_PORT", "8123")
    monkeypatch.setenv("REHOST_OVERRIDE", "true")
    args = entry.build_parser().parse_args(["site.toml"])

    settings = entry.resolve_settings(args, Settings())

    assert settings.port == 8123
    assert settings.override is True


def test_config_argument_is_required() -> None:
    with pytest.raises(SystemExit):
        entry.build_parser().parse_args([])


def test_unknown_cli_log_level_is_rejected() -> None:
    with pytest.raises(SystemExit):
        entry.build_parser().parse_args(["site.toml", "--log-level", "bogus"])


def test_unknown_env_log_level_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REHOST_LOG_LEVEL", "bogus")
    with pytest.raises(ValidationError):
        Settings()


def test_env_log_level_is_normalised(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REHOST_LOG_LEVEL", "warning")
    assert Settings().log_level == "WARNING"


# =============================================================================
# Listener
# =============================================================================


def test_bind_socket_returns_bound_socket() -> None:
    sock = bind_socket("127.0.0.1", 0)
    try:
        assert sock.getsockname()[0] == "127.0.0.1"
        assert sock.getsockname()[1] > 0
    finally:
        sock.close()


@pytest.mark.parametrize("host", ["localhost", "not-an-ip", ""])
def test_bind_socket_rejects_non_ip_host(host: str) -> None:
    with pytest.raises(BindError):
        bind_socket(host, 8000)


def test_bind_socket_rejects_out_of_range_port() -> None:
    with pytest.raises(BindError):
        bind_socket("127.0.0.1", 70000)


def test_bind_socket_address_in_use() -> None:
    holder = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    holder.bind(("127.0.0.1", 0))
    holder.listen()
    try:
        port = holder.getsockname()[1]
        with pytest.raises(BindError):
            bind_socket("127.0.0.1", port)
    finally:
        holder.close()


# =============================================================================
# main()
# =============================================================================


@pytest.fixture
def no_serving(monkeypatch: pytest.MonkeyPatch) -> list[Any]:
    """Record bind attempts and keep uvicorn from running."""
    calls: list[Any] = []

    def _bind(host: str, port: int) -> object:
        calls.append(("bind", host, port))
        return object()

    class _Server:
        def __init__(self, config: Any) -> None:
            calls.append(("server", config))

        def run(self, sockets: list[Any]) -> None:
            calls.append(("run", sockets))

    monkeypatch.setattr(entry, "bind_socket", _bind)
    monkeypatch.setattr(entry.uvicorn, "Server", _Server)
    return calls


def test_missing_local_file_fails_before_binding(
    write_file: Callable[[str, str], Path], no_serving: list[Any]
) -> None:
    config = write_file("rehost.toml", '[[file]]\npath = "/definitely/not/here.txt"\n')

    assert entry.main([str(config), "-p", "8765"]) == 1
    assert no_serving == []


def test_invalid_config_fails_before_binding(
    write_file: Callable[[str, str], Path], no_serving: list[Any]
) -> None:
    config = write_file("rehost.toml", "[[file]]\nrename = 'x'\n")

    assert entry.main([str(config)]) == 1
    assert no_serving == []


def test_bind_error_exits_nonzero(write_file: Callable[[str, str], Path]) -> None:
    config = write_file("rehost.toml", "")

    assert entry.main([str(config), "-H", "not-an-ip"]) == 1


def test_successful_startup_serves_assembled_store(
    write_file: Callable[[str, str], Path], no_serving: list[Any]
) -> None:
    page = write_file("index.html", "Hello NAME")
    config = write_file(
        "rehost.toml",
        f"""
[vars]
name = "world"

[[file]]
path = {str(page)!r}
replace = [{{ from = "NAME", to = "{{name}}" }}]
""",
    )

    assert entry.main([str(config), "-H", "127.0.0.1", "-p", "8765"]) == 0

    assert no_serving[0] == ("bind", "127.0.0.1", 8765)
    kind, uvicorn_config = no_serving[1]
    assert kind == "server"
    assert uvicorn_config.app.state.content_store["index.html"] == "Hello world"
    assert no_serving[2][0] == "run"


@pytest.fixture
def fresh_settings() -> Iterator[None]:
    """Make ``get_settings`` re-read the environment for this test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.mark.parametrize(
    ("variable", "value"),
    [("REHOST_PORT", "not-a-port"), ("REHOST_LOG_LEVEL", "bogus")],
)
def test_invalid_env_settings_exit_nonzero(
    write_file: Callable[[str, str], Path],
    no_serving: list[Any],
    fresh_settings: None,
    monkeypatch: pytest.MonkeyPatch,
    variable: str,
    value: str,
) -> None:
    config = write_file("rehost.toml", "")
    monkeypatch.setenv(variable, value)

    assert entry.main([str(config)]) == 1
    assert no_serving == []
