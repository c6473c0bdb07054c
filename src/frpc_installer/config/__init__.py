"""Configuration management module for the frpc installer."""

from .manager import ConfigManager
from .options import InstallOptions, ProxyService

__all__ = ["ConfigManager", "InstallOptions", "ProxyService"]
