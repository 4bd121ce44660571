"""CLI entrypoint smoke tests."""

from __future__ import annotations

import subprocess
from pathlib import Path
import sys

from downloadables import cli


def test_cli_entrypoint_help() -> None:
    result = subprocess.run(
        [sys.executable, "-m", "downloadables.cli", "--help"],
        capture_output=True,
        text=True,
        check=False,
    )
    assert result.returncode == 0
    assert "usage: downloadables" in result.stdout.lower()


def test_cli_without_command_prints_help(capsys) -> None:
    assert cli.main([]) == 1
    assert "build" in capsys.readouterr().out


def test_build_config_defaults_to_user_settings(monkeypatch) -> None:
    monkeypatch.setenv("HOME", "/tmp/downloadables-home")
    args = cli.build_parser().parse_args(["build"])

    assert args.config == Path("/tmp/downloadables-home/.config/downloadables/settings.json")
