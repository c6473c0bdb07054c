"""frpc installer - install an FRP client as a systemd service or Docker container."""

from .config import ConfigManager, InstallOptions, ProxyService
from .exceptions import InstallerError, CommandError, DownloadError
from .infrastructure import FRPCManager

__version__ = "0.1.0"
__all__ = [
    "ConfigManager",
    "InstallOptions",
    "ProxyService",
    "FRPCManager",
    "InstallerError",
    "CommandError",
    "DownloadError",
]
