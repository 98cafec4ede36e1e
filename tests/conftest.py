from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping, Sequence

import pytest
from memo.app import AppContext
from memo.config import load_config
from memo.storage import NoteDirectory


class FakeRunner:
    """Records commands instead of spawning processes."""

    def __init__(self, output: str = "") -> None:
        self.output = output
        self.calls: list[dict[str, object]] = []

    def __call__(
        self,
        argv: Sequence[str],
        *,
        input: str | None = None,
        capture: bool = False,
        env: Mapping[str, str] | None = None,
    ) -> str:
        self.calls.append(
            {"argv": list(argv), "input": input, "capture": capture, "env": env}
        )
        return self.output if capture else ""


def write_config(base_dir: Path, extra: str = "") -> Path:
    notes_dir = base_dir / "notes"
    notes_dir.mkdir(parents=True, exist_ok=True)
    config_path = base_dir / "config.toml"
    content = f"""
        memodir = "{notes_dir.as_posix()}"
        editor = "vim"
        selectcmd = "peco"
        """
    config_path.write_text(
        textwrap.dedent(content) + textwrap.dedent(extra), encoding="utf-8"
    )
    return config_path


@pytest.fixture(autouse=True)
def _no_memodir_env(monkeypatch) -> None:
    monkeypatch.delenv("MEMODIR", raising=False)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    return write_config(tmp_path)


@pytest.fixture
def app(config_path: Path, fake_runner: FakeRunner) -> AppContext:
    config = load_config(config_path)
    return AppContext(
        config=config, notes=NoteDirectory(config.memo_dir), runner=fake_runner
    )
