"""Custom exceptions for the frpc installer."""


class InstallerError(Exception):
    """Base exception for frpc installer errors."""

    pass


class ConfigurationError(InstallerError):
    """Raised when a configuration file cannot be read or is malformed."""

    pass


class DownloadError(InstallerError):
    """Raised when a release artifact cannot be downloaded or unpacked."""

    pass


class PrivilegeError(InstallerError):
    """Raised when the installer is not running as root."""

    pass


class AlreadyInstalledError(InstallerError):
    """Raised when frpc is already running and --force was not given."""

    pass


class CommandError(InstallerError):
    """Raised when an external command exits with a non-zero status."""

    def __init__(self, command, returncode, stderr=""):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        message = f"Command '{' '.join(self.command)}' failed with exit code {returncode}"
        if stderr:
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)
