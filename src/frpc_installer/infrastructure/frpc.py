"""FRPC installation as a systemd service or a Docker container."""

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from ..config import defaults
from ..config.options import InstallOptions
from ..exceptions import AlreadyInstalledError, DownloadError
from ..templates import render_frpc_ini, render_systemd_unit
from .docker import DockerManager
from .download import Downloader, detect_arch
from .shell import CommandRunner
from .systemd import SystemdManager


@dataclass
class ReleaseInfo:
    version: str
    arch: str
    filename: str
    directory: str
    url: str


def release_info(version: str, arch: str) -> ReleaseInfo:
    """Describe the frp release tarball for a version and architecture."""
    version = version.lstrip("v")
    directory = f"frp_{version}_linux_{arch}"
    filename = f"{directory}.tar.gz"
    url = defaults.FRP_RELEASE_URL.format(version=version, filename=filename)
    return ReleaseInfo(version, arch, filename, directory, url)


class FRPCManager:
    """Manages FRPC (Fast Reverse Proxy Client) setup and configuration."""

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        downloader: Optional[Downloader] = None,
        systemd: Optional[SystemdManager] = None,
        docker_manager: Optional[DockerManager] = None,
        console: Optional[Console] = None,
        config_dir: Path = defaults.FRP_CONFIG_DIR,
        binary_path: Path = defaults.FRPC_BINARY_PATH,
        unit_path: Path = defaults.SYSTEMD_UNIT_PATH,
        work_dir: Path = defaults.WORK_DIR,
        arch: Optional[str] = None,
    ):
        self.console = console or Console()
        self.runner = runner or CommandRunner()
        self.downloader = downloader or Downloader(console=self.console)
        self.systemd = systemd or SystemdManager(self.runner)
        self.docker_manager = docker_manager or DockerManager(
            self.runner, self.downloader, console=self.console
        )
        self.config_dir = Path(config_dir)
        self.binary_path = Path(binary_path)
        self.unit_path = Path(unit_path)
        self.work_dir = Path(work_dir)
        self.arch = arch

    @property
    def config_path(self) -> Path:
        return self.config_dir / defaults.FRPC_CONFIG_FILE

    def is_installed(self) -> bool:
        """Check if the frpc systemd service is already active."""
        return self.systemd.is_active(defaults.SERVICE_NAME)

    def ensure_not_installed(self, options: InstallOptions) -> None:
        if options.docker or options.force:
            return
        if self.is_installed():
            raise AlreadyInstalledError("* FRPC is already installed (use -f to override this)")

    def write_config(self, options: InstallOptions) -> Path:
        """Write frpc.ini for the given options."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(render_frpc_ini(options))
        self.console.print(f"[green]✓ Wrote frpc configuration to {self.config_path}[/green]")
        return self.config_path

    def install_binary(self, extracted_dir: Path, force: bool = False) -> bool:
        """Copy frpc into place unless it is already there. Returns True when copied."""
        if self.binary_path.exists() and not force:
            self.console.print(f"* {self.binary_path} already exists, keeping it")
            return False

        source = extracted_dir / "frpc"
        if not source.is_file():
            raise DownloadError(f"frpc binary not found in {extracted_dir}")

        self.binary_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, self.binary_path)
        self.binary_path.chmod(0o755)
        self.console.print(f"[green]✓ Installed frpc to {self.binary_path}[/green]")
        return True

    def install_unit(self, service_url: Optional[str]) -> None:
        self.unit_path.parent.mkdir(parents=True, exist_ok=True)
        if service_url:
            self.downloader.download(service_url, self.unit_path)
        else:
            self.unit_path.write_text(render_systemd_unit(self.binary_path, self.config_path))

    def start_service(self, service_url: Optional[str]) -> None:
        """Install, enable and start the unit, or restart it if it is already active."""
        unit = defaults.SERVICE_NAME
        if not self.systemd.is_active(unit):
            self.console.print("* Installing, enabling and starting frpc service")
            self.install_unit(service_url)
            self.systemd.daemon_reload()
            self.systemd.enable(unit)
            self.systemd.start(unit)
        else:
            self.console.print("* Wrote new config; restarting frpc")
            self.systemd.restart(unit)

    def install_system(self, options: InstallOptions) -> None:
        """Install frpc from the release tarball as a systemd service."""
        release = release_info(options.version, self.arch or detect_arch())
        self.console.print("[bold]* FRPC INSTALL[/bold]")
        self.console.print(f"* Version: {escape(release.version)}")
        self.console.print(f"* Filename: {escape(release.filename)}")
        self.console.print(f"* Install Directory: {escape(release.directory)}")
        self.console.print(f"* Download URL: {escape(release.url)}")

        archive = self.work_dir / release.filename
        extracted = self.work_dir / release.directory
        try:
            self.downloader.download(release.url, archive)
            self.downloader.extract_tarball(archive, self.work_dir)

            self.write_config(options)
            self.install_binary(extracted, force=options.force)
            self.start_service(options.service_url)
        finally:
            shutil.rmtree(extracted, ignore_errors=True)
            archive.unlink(missing_ok=True)

        self.console.print("[bold green]✓ frpc service is installed[/bold green]")

    def install_docker(self, options: InstallOptions) -> str:
        """Run frpc as a Docker container on the host network."""
        self.docker_manager.ensure_installed()

        name = defaults.CONTAINER_NAME
        if self.docker_manager.container_exists(name):
            if not options.force:
                raise AlreadyInstalledError(
                    f"* A '{name}' container already exists (use -f to override this)"
                )
            self.console.print(f"[yellow]* Removing existing '{name}' container[/yellow]")
            self.docker_manager.remove_container(name)

        container_id = self.docker_manager.run_frpc_container(
            name,
            options.image,
            {
                "FRPC_IP": options.server,
                "FRPC_PORT": str(options.port),
                "FRPC_TOKEN": options.token,
                "FRPC_SERVICES": options.frpc_services_env(),
            },
        )
        self.console.print("[bold green]✓ FRPC Docker container started successfully[/bold green]")
        return container_id

    def install(self, options: InstallOptions) -> None:
        if options.docker:
            self.install_docker(options)
        else:
            self.install_system(options)
