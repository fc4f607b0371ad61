"""Release build, artifact copy and profile configuration, run in that order."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from rgp_installer.command import run_cmd
from rgp_installer.config import InstallConfig
from rgp_installer.errors import BuildError, CommandError, CopyError
from rgp_installer.shell import add_to_shell, build_block, has_block, read_profile, remove_from_shell
from rgp_installer.utils import info

logger = logging.getLogger(__name__)


# -- Build --

def build_release(project_dir: Path, dry_run: bool = False) -> None:
    """Run ``cargo build --release`` in the project directory."""
    if not dry_run and not (project_dir / "Cargo.toml").exists():
        raise BuildError(f"No Cargo.toml in {project_dir}")
    try:
        run_cmd(["cargo", "build", "--release"], cwd=project_dir, dry_run=dry_run)
    except CommandError as e:
        raise BuildError(f"Release build failed: {e}") from e


def artifact_path(project_dir: Path, binary_name: str) -> Path:
    return project_dir / "target" / "release" / binary_name


def locate_artifact(project_dir: Path, binary_name: str, dry_run: bool = False) -> Path:
    """Return the built release artifact, raising BuildError if it is missing."""
    path = artifact_path(project_dir, binary_name)
    if path.is_file():
        return path
    if dry_run:
        logger.info("Dry run: %s does not exist yet", path)
        return path
    raise BuildError(f"Build artifact not found: {path}")


# -- Copy --

def copy_artifact(
    artifact: Path, install_dir: Path, use_sudo: bool = True, dry_run: bool = False
) -> Path:
    """Copy the artifact into install_dir. Returns the installed path."""
    dest = install_dir / artifact.name
    if not install_dir.is_dir():
        # cp would otherwise create a file named after the missing directory
        raise CopyError(f"Install directory does not exist: {install_dir}")
    if use_sudo:
        try:
            run_cmd(["sudo", "cp", artifact, install_dir], dry_run=dry_run)
        except CommandError as e:
            raise CopyError(f"Could not copy {artifact} to {install_dir}: {e}") from e
        return dest

    if dry_run:
        logger.info("Dry run: would copy %s to %s", artifact, dest)
        return dest
    try:
        shutil.copy2(artifact, dest)
    except OSError as e:
        raise CopyError(f"Could not copy {artifact} to {install_dir}: {e}") from e
    logger.info("Copied %s to %s", artifact, dest)
    return dest


def remove_installed_binary(path: Path, use_sudo: bool = True, dry_run: bool = False) -> None:
    if use_sudo:
        try:
            run_cmd(["sudo", "rm", "-f", path], dry_run=dry_run)
        except CommandError as e:
            raise CopyError(f"Could not remove {path}: {e}") from e
        return

    if dry_run:
        logger.info("Dry run: would remove %s", path)
        return
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        raise CopyError(f"Could not remove {path}: {e}") from e


# -- Status --

@dataclass(frozen=True)
class InstallStatus:
    artifact: Path
    artifact_built: bool
    installed_binary: Path
    binary_installed: bool
    profile: Path
    profile_configured: bool


def installation_status(config: InstallConfig) -> InstallStatus:
    artifact = artifact_path(config.project_dir, config.binary_name)
    return InstallStatus(
        artifact=artifact,
        artifact_built=artifact.is_file(),
        installed_binary=config.installed_binary,
        binary_installed=config.installed_binary.is_file(),
        profile=config.profile,
        profile_configured=has_block(read_profile(config.profile)),
    )


# -- High-level orchestration --

def _profile_label(profile: Path) -> str:
    return profile.name.lstrip(".") or str(profile)


def do_install(config: InstallConfig) -> bool:
    """Build, copy, then configure the profile. Errors abort the remaining steps.

    Returns True if the profile was modified.
    """
    if config.skip_build:
        info("Skipping build")
    else:
        info("Building program")
        build_release(config.project_dir, dry_run=config.dry_run)

    artifact = locate_artifact(config.project_dir, config.binary_name, dry_run=config.dry_run)

    info(f"Copying program to {config.install_dir}")
    copy_artifact(artifact, config.install_dir, use_sudo=config.use_sudo, dry_run=config.dry_run)

    label = _profile_label(config.profile)
    if has_block(read_profile(config.profile)):
        info(f"{label} already configured")
        return False

    info(f"Updating {label}")
    return add_to_shell(config.profile, build_block(config.binary_name), dry_run=config.dry_run)


def do_uninstall(config: InstallConfig) -> bool:
    """Strip the prompt block from the profile and remove the installed binary.

    Returns True if the profile was modified.
    """
    label = _profile_label(config.profile)
    if remove_from_shell(config.profile, dry_run=config.dry_run):
        info(f"Removed prompt configuration from {label}")
        modified = True
    else:
        info(f"{label} has no prompt configuration")
        modified = False

    info(f"Removing {config.installed_binary}")
    remove_installed_binary(config.installed_binary, use_sudo=config.use_sudo, dry_run=config.dry_run)
    return modified
