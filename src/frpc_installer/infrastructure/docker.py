"""Docker utilities for managing the frpc container."""

from typing import Dict, Optional

from rich.console import Console

from ..config import defaults
from .download import Downloader
from .packages import PackageManager
from .shell import CommandRunner


class DockerManager:
    """Manages Docker operations for the frpc container install."""

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        downloader: Optional[Downloader] = None,
        packages: Optional[PackageManager] = None,
        console: Optional[Console] = None,
    ):
        self.runner = runner or CommandRunner()
        self.console = console or Console()
        self.downloader = downloader or Downloader(console=self.console)
        self.packages = packages or PackageManager(self.runner, self.console)

    def is_available(self) -> bool:
        """Check if Docker is available on the system."""
        return self.runner.which("docker") is not None

    def install(self, script_url: str = defaults.DOCKER_INSTALL_URL) -> None:
        """Install Docker with the upstream convenience script."""
        self.console.print("[yellow]* Installing Docker[/yellow]")
        # get.docker.com needs curl or wget for its own downloads
        self.packages.install_packages("curl")
        script = self.downloader.fetch_text(script_url)
        self.runner.run(["sh"], input=script)
        self.console.print("[green]✓ Docker installed[/green]")

    def ensure_installed(self) -> None:
        if self.is_available():
            self.console.print("* Docker is already installed")
        else:
            self.install()

    def container_exists(self, name: str) -> bool:
        """Check if a container with exactly this name exists, running or not."""
        result = self.runner.run(
            ["docker", "ps", "-a", "--filter", f"name=^{name}$", "--format", "{{.Names}}"],
            check=False,
        )
        return name in result.stdout.split()

    def remove_container(self, name: str) -> None:
        self.runner.run(["docker", "rm", "-f", name])

    def run_frpc_container(self, name: str, image: str, env: Dict[str, str]) -> str:
        """Start the frpc container on the host network and return its id."""
        command = ["docker", "run", "--restart=always", "--network", "host", "-d"]
        for key, value in env.items():
            command += ["-e", f"{key}={value}"]
        command += ["--name", name, image]
        result = self.runner.run(command)
        return result.stdout.strip()
