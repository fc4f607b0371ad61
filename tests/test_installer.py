from dataclasses import replace
from pathlib import Path

import pytest

from rgp_installer import installer
from rgp_installer.errors import BuildError, CopyError
from rgp_installer.shell import BEGIN_MARKER, build_block


def test_install_builds_copies_then_configures(install_config, fake_run, capsys):
    assert installer.do_install(install_config)

    assert fake_run.calls == [["cargo", "build", "--release"]]
    installed = install_config.install_dir / "rusty_git_prompt"
    assert installed.read_bytes() == b"\x7fELF fake"
    assert install_config.profile.read_text() == build_block()

    out = capsys.readouterr().out.splitlines()
    assert out == [
        "Building program",
        f"Copying program to {install_config.install_dir}",
        "Updating bashrc",
    ]


def test_install_twice_keeps_one_block(install_config, fake_run, capsys):
    installer.do_install(install_config)
    first = install_config.profile.read_bytes()

    assert not installer.do_install(install_config)
    assert install_config.profile.read_bytes() == first
    assert first.decode().count(BEGIN_MARKER) == 1
    assert "bashrc already configured" in capsys.readouterr().out


def test_build_failure_stops_before_copy_and_profile(install_config, fake_run):
    fake_run.fail_on = "cargo"
    install_config.profile.write_text("a\n")

    with pytest.raises(BuildError):
        installer.do_install(install_config)

    assert fake_run.commands() == ["cargo"]
    assert not (install_config.install_dir / "rusty_git_prompt").exists()
    assert install_config.profile.read_text() == "a\n"


def test_missing_artifact_is_a_build_error(install_config, fake_run):
    fake_run.build_creates_artifact = False
    with pytest.raises(BuildError, match="not found"):
        installer.do_install(install_config)
    assert not install_config.profile.exists()


def test_missing_cargo_toml(tmp_path: Path, fake_run):
    with pytest.raises(BuildError, match="Cargo.toml"):
        installer.build_release(tmp_path)
    assert fake_run.calls == []


def test_missing_cargo_executable(cargo_project: Path, monkeypatch):
    def not_found(argv, cwd=None, capture_output=False):
        raise FileNotFoundError(argv[0])

    monkeypatch.setattr("rgp_installer.command.subprocess.run", not_found)
    with pytest.raises(BuildError, match="Command not found: cargo"):
        installer.build_release(cargo_project)


def test_sudo_copy_failure_stops_before_profile(install_config, fake_run):
    config = replace(install_config, use_sudo=True)
    fake_run.fail_on = "sudo"

    with pytest.raises(CopyError):
        installer.do_install(config)

    artifact = config.project_dir / "target" / "release" / "rusty_git_prompt"
    assert fake_run.calls[-1] == ["sudo", "cp", str(artifact), str(config.install_dir)]
    assert not config.profile.exists()


def test_copy_without_sudo_into_missing_dir(tmp_path: Path):
    artifact = tmp_path / "rusty_git_prompt"
    artifact.write_bytes(b"bin")
    with pytest.raises(CopyError):
        installer.copy_artifact(artifact, tmp_path / "nope", use_sudo=False)


def test_skip_build_uses_existing_artifact(install_config, fake_run):
    release = install_config.project_dir / "target" / "release"
    release.mkdir(parents=True)
    (release / "rusty_git_prompt").write_bytes(b"prebuilt")

    installer.do_install(replace(install_config, skip_build=True))

    assert fake_run.calls == []
    assert (install_config.install_dir / "rusty_git_prompt").read_bytes() == b"prebuilt"


def test_dry_run_changes_nothing(install_config, fake_run):
    config = replace(install_config, dry_run=True, use_sudo=True)
    installer.do_install(config)

    assert fake_run.calls == []
    assert not (config.install_dir / "rusty_git_prompt").exists()
    assert not config.profile.exists()


def test_uninstall_reverses_install(install_config, fake_run):
    install_config.profile.write_text("a\n")
    installer.do_install(install_config)

    assert installer.do_uninstall(install_config)
    assert install_config.profile.read_text() == "a\n"
    assert not (install_config.install_dir / "rusty_git_prompt").exists()


def test_uninstall_with_sudo_runs_rm(install_config, fake_run):
    config = replace(install_config, use_sudo=True)
    assert not installer.do_uninstall(config)
    assert fake_run.calls == [["sudo", "rm", "-f", str(config.installed_binary)]]


def test_status(install_config, fake_run):
    before = installer.installation_status(install_config)
    assert not (before.artifact_built or before.binary_installed or before.profile_configured)

    installer.do_install(install_config)

    after = installer.installation_status(install_config)
    assert after.artifact_built
    assert after.binary_installed
    assert after.profile_configured


@pytest.mark.parametrize("use_sudo", [True, False])
def test_missing_install_dir_fails_before_copy_and_profile(install_config, fake_run, use_sudo):
    config = replace(install_config, install_dir=install_config.install_dir / "missing", use_sudo=use_sudo)

    with pytest.raises(CopyError, match="does not exist"):
        installer.do_install(config)

    assert fake_run.commands() == ["cargo"]
    assert not config.install_dir.exists()
    assert not config.profile.exists()
