"""OS package installation with existence checks."""

from typing import List, Optional

from rich.console import Console

from ..exceptions import InstallerError
from .shell import CommandRunner

# Checked in order, first one found on PATH wins
PACKAGE_MANAGERS = (
    ("apt-get", [["apt-get", "update"]], ["apt-get", "install", "-y"]),
    ("dnf", [], ["dnf", "install", "-y"]),
    ("yum", [], ["yum", "install", "-y"]),
)


class PackageManager:
    """Installs missing command-line tools through the OS package manager."""

    def __init__(self, runner: Optional[CommandRunner] = None, console: Optional[Console] = None):
        self.runner = runner or CommandRunner()
        self.console = console or Console()

    def detect(self):
        for name, prepare, install in PACKAGE_MANAGERS:
            if self.runner.which(name):
                return name, prepare, install
        raise InstallerError("No supported package manager found (apt-get, dnf or yum)")

    def missing(self, *packages: str) -> List[str]:
        """Return the packages whose command is not on PATH, reporting each one."""
        missing = []
        for package in packages:
            if self.runner.which(package):
                self.console.print(f"* {package} is already installed")
            else:
                self.console.print(f"* {package} will be installed")
                missing.append(package)
        return missing

    def install_packages(self, *packages: str) -> List[str]:
        """Install the given packages unless their commands already exist.

        Returns the list of packages that were actually installed.
        """
        if not packages:
            self.console.print("* No packages requested to install")
            return []

        missing = self.missing(*packages)
        if not missing:
            self.console.print("* All requested packages are already installed")
            return []

        _, prepare, install = self.detect()
        self.console.print(f"[yellow]* Installing {' '.join(missing)}[/yellow]")
        for command in prepare:
            self.runner.run(command)
        self.runner.run(install + missing)
        return missing
