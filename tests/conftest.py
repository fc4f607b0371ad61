"""
Shared fixtures: a fake Cargo project and a recorder standing in for subprocess.run.
"""
import logging
import subprocess
from pathlib import Path

import pytest

from rgp_installer.config import InstallConfig


class FakeRunner:
    """Records argv lists and mimics cargo/sudo side effects."""

    def __init__(self):
        self.calls = []
        self.fail_on = None
        self.build_creates_artifact = True

    def __call__(self, argv, cwd=None, capture_output=False):
        self.calls.append(list(argv))
        if self.fail_on and argv[0] == self.fail_on:
            return subprocess.CompletedProcess(argv, 101)
        if argv[:2] == ["cargo", "build"] and self.build_creates_artifact:
            release = Path(cwd) / "target" / "release"
            release.mkdir(parents=True, exist_ok=True)
            (release / "rusty_git_prompt").write_bytes(b"\x7fELF fake")
        return subprocess.CompletedProcess(argv, 0)

    def commands(self):
        return [c[0] for c in self.calls]


@pytest.fixture
def fake_run(monkeypatch):
    runner = FakeRunner()
    monkeypatch.setattr("rgp_installer.command.subprocess.run", runner)
    return runner


@pytest.fixture
def cargo_project(tmp_path: Path) -> Path:
    project = tmp_path / "project"
    project.mkdir()
    (project / "Cargo.toml").write_text(
        '[package]\nname = "rusty_git_prompt"\nversion = "0.1.0"\nedition = "2018"\n'
    )
    return project


@pytest.fixture
def install_config(tmp_path: Path, cargo_project: Path) -> InstallConfig:
    install_dir = tmp_path / "bin"
    install_dir.mkdir()
    (tmp_path / "home").mkdir()
    return InstallConfig(
        project_dir=cargo_project,
        install_dir=install_dir,
        profile=tmp_path / "home" / ".bashrc",
        use_sudo=False,
    )


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("rgp_installer")
    handler = getattr(logger, "_rgp_handler", None)
    if handler is not None:
        logger.removeHandler(handler)
        delattr(logger, "_rgp_handler")
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
