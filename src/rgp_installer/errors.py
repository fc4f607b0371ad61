"""Exception hierarchy for install failures."""


class InstallError(Exception):
    """Base class for errors that abort an install or uninstall."""


class CommandError(InstallError):
    pass


class BuildError(InstallError):
    pass


class CopyError(InstallError):
    pass


class ProfileError(InstallError):
    pass
