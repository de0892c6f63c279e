from __future__ import annotations

import sys
import types
from pathlib import Path

import pytest
from typer.testing import CliRunner

from photogames import main as cli

runner = CliRunner()


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "configure_logging", lambda verbose=False: None)


def test_list_builtin_photos() -> None:
    result = runner.invoke(cli.app, ["--list-photos"])
    assert result.exit_code == 0
    assert "Beach" in result.output
    assert "built-in" in result.output


def test_list_photos_from_env(tmp_path: Path) -> None:
    (tmp_path / "family_trip.png").write_bytes(b"fake")
    result = runner.invoke(cli.app, ["--list-photos"], env={"PHOTOGAMES_PHOTOS": str(tmp_path)})
    assert result.exit_code == 0
    assert "family trip" in result.output


def test_missing_photo_directory_is_a_usage_error(tmp_path: Path) -> None:
    result = runner.invoke(cli.app, ["--photos", str(tmp_path / "nope"), "--list-photos"])
    assert result.exit_code == 2


def test_too_few_photos_for_memory(tmp_path: Path) -> None:
    for name in ("a.png", "b.png", "c.png"):
        (tmp_path / name).write_bytes(b"fake")
    result = runner.invoke(cli.app, ["--photos", str(tmp_path), "-g", "memory", "--list-photos"])
    assert result.exit_code == 2


def test_pairs_out_of_range() -> None:
    result = runner.invoke(cli.app, ["--pairs", "9", "--list-photos"])
    assert result.exit_code == 2


def test_frontend_receives_session(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple] = []

    def run(library, config, game):
        calls.append((len(library), config.seed, config.memory_pairs, game))

    fake = types.ModuleType("fake_frontend")
    fake.run = run
    monkeypatch.setitem(sys.modules, "fake_frontend", fake)
    monkeypatch.setitem(cli._RUNNERS, cli.Frontend.rich, "fake_frontend")
    result = runner.invoke(cli.app, ["-f", "rich", "-g", "swap", "--seed", "42", "--pairs", "5"])
    assert result.exit_code == 0
    assert calls == [(9, 42, 5, "swap")]
