"""Downloading and unpacking release artifacts."""

import platform
import tarfile
from pathlib import Path
from typing import Optional

import requests
from rich.console import Console
from rich.markup import escape

from ..config import defaults
from ..exceptions import DownloadError, InstallerError

ARCH_MAPPING = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "i386": "386",
    "i686": "386",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "arm",
    "armv6l": "arm",
    "mips": "mips",
    "mipsel": "mipsle",
    "mips64": "mips64",
    "mips64el": "mips64le",
    "riscv64": "riscv64",
    "loongarch64": "loong64",
}


def detect_arch(machine: Optional[str] = None) -> str:
    """Map the host machine name onto frp's release architecture names."""
    machine = (machine or platform.machine()).lower()
    try:
        return ARCH_MAPPING[machine]
    except KeyError:
        raise InstallerError(f"Unsupported architecture: {machine}") from None


class Downloader:
    """Fetches files over HTTP with requests."""

    def __init__(self, session: Optional[requests.Session] = None, console: Optional[Console] = None,
                 timeout: int = defaults.DOWNLOAD_TIMEOUT):
        self.session = session or requests.Session()
        self.console = console or Console()
        self.timeout = timeout

    def download(self, url: str, dest: Path) -> Path:
        """Stream url into dest, following redirects."""
        dest = Path(dest)
        self.console.print(f"* Downloading {escape(url)}")
        try:
            with self.session.get(url, stream=True, timeout=self.timeout, allow_redirects=True) as response:
                response.raise_for_status()
                with open(dest, "wb") as f:
                    for chunk in response.iter_content(chunk_size=65536):
                        if chunk:
                            f.write(chunk)
        except requests.RequestException as e:
            dest.unlink(missing_ok=True)
            raise DownloadError(f"Failed to download {url}: {e}") from e
        return dest

    def fetch_text(self, url: str) -> str:
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise DownloadError(f"Failed to download {url}: {e}") from e
        return response.text

    @staticmethod
    def extract_tarball(archive: Path, dest_dir: Path) -> Path:
        """Extract a .tar.gz archive into dest_dir."""
        try:
            with tarfile.open(archive, "r:gz") as tar:
                if hasattr(tarfile, "data_filter"):
                    tar.extractall(dest_dir, filter="data")
                else:
                    tar.extractall(dest_dir)
        except (tarfile.TarError, EOFError, OSError) as e:
            raise DownloadError(f"Failed to extract {archive}: {e}") from e
        return Path(dest_dir)
