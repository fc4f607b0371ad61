"""rgp-install: build and install rusty_git_prompt and wire it into the shell prompt."""

__version__ = "0.1.0"
