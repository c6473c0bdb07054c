"""Infrastructure management module for the frpc installer."""

from .shell import CommandRunner
from .packages import PackageManager
from .download import Downloader, detect_arch
from .systemd import SystemdManager
from .docker import DockerManager
from .history import HistoryCleaner
from .frpc import FRPCManager, release_info

__all__ = [
    "CommandRunner",
    "PackageManager",
    "Downloader",
    "detect_arch",
    "SystemdManager",
    "DockerManager",
    "HistoryCleaner",
    "FRPCManager",
    "release_info",
]
