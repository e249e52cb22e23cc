"""Verify CLI modules expose main() and token-watch --help works."""

from __future__ import annotations

import subprocess
import sys
from importlib import import_module

import pytest

_CLI_MODULES = [
    "token_watch.cli.main",
    "token_watch.cli.snapshot",
    "token_watch.cli.status",
]


@pytest.mark.parametrize("module_name", _CLI_MODULES)
def test_cli_module_has_main(module_name):
    mod = import_module(module_name)
    assert hasattr(mod, "main"), f"{module_name} missing main()"
    assert callable(mod.main), f"{module_name}.main not callable"


def test_cli_main_help_exits_zero():
    """cli.main.main(["--help"]) exits with 0 (in-process)."""
    from token_watch.cli.main import main

    with pytest.raises(SystemExit) as exc_info:
        main(["--help"])
    assert exc_info.value.code == 0


def test_cli_main_without_command_prints_help(capsys):
    from token_watch.cli.main import main

    assert main([]) == 0
    assert "snapshot" in capsys.readouterr().out


def test_snapshot_unknown_token_fails(capsys, monkeypatch, tmp_path):
    from token_watch.cli import snapshot

    monkeypatch.setenv("TOKEN_WATCH_CONFIG", str(tmp_path / "missing.yaml"))
    assert snapshot.main(["DOGE"]) == 2
    assert "[FAIL]" in capsys.readouterr().out


def test_token_watch_module_help_exits_zero():
    """python -m token_watch --help exits 0 and lists commands (subprocess)."""
    r = subprocess.run(
        [sys.executable, "-m", "token_watch", "--help"],
        capture_output=True,
        text=True,
        timeout=10,
    )
    assert r.returncode == 0, (r.stdout or "") + (r.stderr or "")
    out = (r.stdout or "") + (r.stderr or "")
    assert "snapshot" in out, "Help output should list 'snapshot' command"


def test_status_rejects_explicit_zero_interval(capsys, monkeypatch, tmp_path):
    from token_watch.cli import status

    monkeypatch.setenv("TOKEN_WATCH_CONFIG", str(tmp_path / "missing.yaml"))
    assert status.main(["--interval", "0", "--once"]) == 2
    assert "[FAIL]" in capsys.readouterr().out


def test_snapshot_unknown_reference_token_fails(capsys, monkeypatch, tmp_path):
    from token_watch.cli import snapshot

    path = tmp_path / "config.yaml"
    path.write_text("reference_token: USDC\n", encoding="utf-8")
    monkeypatch.setenv("TOKEN_WATCH_CONFIG", str(path))
    assert snapshot.main(["LABS"]) == 2
    assert "reference_token" in capsys.readouterr().out
