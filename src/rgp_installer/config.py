"""Install configuration: CLI arguments plus the binary name from Cargo.toml."""

from __future__ import annotations

import argparse
import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from rgp_installer.errors import ProfileError
from rgp_installer.shell import DEFAULT_BINARY_NAME

logger = logging.getLogger(__name__)

DEFAULT_INSTALL_DIR = Path("/usr/local/bin")
DEFAULT_PROFILE = "~/.bashrc"


def read_cargo_binary_name(project_dir: Path) -> str | None:
    """Read Cargo.toml and return the binary name, or None if unparseable.

    An explicit ``[[bin]]`` target wins over the package name.
    """
    toml_path = project_dir / "Cargo.toml"
    if not toml_path.exists():
        return None
    try:
        with open(toml_path, "rb") as f:
            data = tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Could not parse %s: %s", toml_path, e)
        return None

    for target in data.get("bin", []):
        if isinstance(target, dict) and target.get("name"):
            return target["name"]
    return data.get("package", {}).get("name") or None


def expand_profile(raw: str = DEFAULT_PROFILE) -> Path:
    """Expand ``~`` in a profile path, raising ProfileError when there is no home directory."""
    try:
        return Path(raw).expanduser()
    except RuntimeError as e:
        raise ProfileError(f"Cannot expand {raw}: {e} Pass --profile with an absolute path.") from e


@dataclass(frozen=True)
class InstallConfig:
    project_dir: Path
    install_dir: Path = DEFAULT_INSTALL_DIR
    profile: Path = field(default_factory=expand_profile)
    binary_name: str = DEFAULT_BINARY_NAME
    use_sudo: bool = True
    skip_build: bool = False
    dry_run: bool = False

    @property
    def installed_binary(self) -> Path:
        return self.install_dir / self.binary_name

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "InstallConfig":
        project_dir = Path(args.project_dir or ".").expanduser().resolve()
        binary_name = (
            args.binary_name
            or read_cargo_binary_name(project_dir)
            or DEFAULT_BINARY_NAME
        )
        return cls(
            project_dir=project_dir,
            install_dir=Path(args.install_dir).expanduser() if args.install_dir else DEFAULT_INSTALL_DIR,
            profile=expand_profile(args.profile or DEFAULT_PROFILE),
            binary_name=binary_name,
            use_sudo=not args.no_sudo,
            skip_build=getattr(args, "skip_build", False),
            dry_run=args.dry_run,
        )
