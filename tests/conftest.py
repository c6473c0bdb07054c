"""pytest configuration and shared fixtures."""

import io
import subprocess
import tarfile
from pathlib import Path
from typing import Dict, Optional, Tuple
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from frpc_installer.config.options import InstallOptions
from frpc_installer.exceptions import CommandError, DownloadError
from frpc_installer.infrastructure.download import Downloader
from frpc_installer.infrastructure.frpc import FRPCManager, release_info


class FakeRunner:
    """Records commands instead of running them.

    ``responses`` maps a command prefix tuple to ``(returncode, stdout)``.
    """

    def __init__(self, available=(), responses: Optional[Dict[Tuple[str, ...], Tuple[int, str]]] = None):
        self.available = set(available)
        self.responses = responses or {}
        self.commands = []
        self.inputs = []

    def which(self, name):
        return f"/usr/bin/{name}" if name in self.available else None

    def run(self, args, input=None, check=True):
        command = [str(arg) for arg in args]
        self.commands.append(command)
        self.inputs.append(input)

        returncode, stdout = 0, ""
        for prefix, response in self.responses.items():
            if tuple(command[: len(prefix)]) == prefix:
                returncode, stdout = response
                break

        if check and returncode != 0:
            raise CommandError(command, returncode, "simulated failure")
        return subprocess.CompletedProcess(command, returncode, stdout, "")


class FakeDownloader(Downloader):
    """Serves canned content per URL instead of hitting the network."""

    def __init__(self, files=None, texts=None, console=None):
        super().__init__(session=MagicMock(), console=console)
        self.files = files or {}
        self.texts = texts or {}
        self.requested = []

    def download(self, url, dest):
        self.requested.append(url)
        if url not in self.files:
            raise DownloadError(f"Failed to download {url}: 404")
        Path(dest).write_bytes(self.files[url])
        return Path(dest)

    def fetch_text(self, url):
        self.requested.append(url)
        if url not in self.texts:
            raise DownloadError(f"Failed to download {url}: 404")
        return self.texts[url]


def build_release_tarball(directory: str, binary: bytes = b"#!/bin/sh\necho frpc\n") -> bytes:
    """Build an in-memory tar.gz shaped like an frp release."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        for name, content in (("frpc", binary), ("LICENSE", b"Apache-2.0\n")):
            info = tarfile.TarInfo(f"{directory}/{name}")
            info.size = len(content)
            info.mode = 0o755
            tar.addfile(info, io.BytesIO(content))
    return buffer.getvalue()


@pytest.fixture
def console() -> Console:
    """Console writing into a buffer, read it back with ``console.file.getvalue()``."""
    return Console(file=io.StringIO(), width=200, force_terminal=False)


@pytest.fixture
def options() -> InstallOptions:
    return InstallOptions(server="203.0.113.10", token="abcd12345")


@pytest.fixture
def release():
    return release_info("0.59.0", "amd64")


@pytest.fixture
def downloader(console, release):
    return FakeDownloader(
        files={release.url: build_release_tarball(release.directory)},
        console=console,
    )


@pytest.fixture
def runner():
    return FakeRunner(
        available={"docker", "apt-get", "systemctl"},
        responses={("systemctl", "show"): (0, "ActiveState=inactive\n")},
    )


@pytest.fixture
def sandbox(tmp_path):
    """Filesystem layout standing in for /etc, /usr/bin and /tmp."""
    work_dir = tmp_path / "tmp"
    work_dir.mkdir()
    return {
        "config_dir": tmp_path / "etc" / "frp",
        "binary_path": tmp_path / "usr" / "bin" / "frpc",
        "unit_path": tmp_path / "etc" / "systemd" / "system" / "frpc.service",
        "work_dir": work_dir,
    }


@pytest.fixture
def manager(runner, downloader, console, sandbox):
    return FRPCManager(
        runner=runner,
        downloader=downloader,
        console=console,
        arch="amd64",
        **sandbox,
    )
