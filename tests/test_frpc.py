"""Tests for FRPCManager install flows."""

import pytest

from frpc_installer.exceptions import AlreadyInstalledError, DownloadError
from frpc_installer.infrastructure.frpc import release_info
from tests.conftest import FakeRunner


def test_release_info():
    release = release_info("v0.59.0", "arm64")

    assert release.version == "0.59.0"
    assert release.filename == "frp_0.59.0_linux_arm64.tar.gz"
    assert release.directory == "frp_0.59.0_linux_arm64"
    assert release.url == (
        "https://github.com/fatedier/frp/releases/download/v0.59.0/frp_0.59.0_linux_arm64.tar.gz"
    )


def test_write_config(manager, options, sandbox):
    path = manager.write_config(options)

    assert path == sandbox["config_dir"] / "frpc.ini"
    assert "server_addr = 203.0.113.10" in path.read_text()


def test_install_system_fresh(manager, options, runner, downloader, release, sandbox):
    options.service_url = None

    manager.install_system(options)

    assert downloader.requested == [release.url]
    assert sandbox["binary_path"].read_bytes().startswith(b"#!/bin/sh")
    assert sandbox["binary_path"].stat().st_mode & 0o777 == 0o755
    assert "ExecStart=" in sandbox["unit_path"].read_text()
    assert (sandbox["config_dir"] / "frpc.ini").exists()
    assert runner.commands[-3:] == [
        ["systemctl", "daemon-reload"],
        ["systemctl", "enable", "frpc"],
        ["systemctl", "start", "frpc"],
    ]
    # downloaded tarball and extracted directory are removed
    assert list(sandbox["work_dir"].iterdir()) == []


def test_install_system_fetches_hosted_unit(manager, options, downloader, sandbox):
    downloader.files[options.service_url] = b"[Unit]\nDescription=hosted\n"

    manager.install_system(options)

    assert downloader.requested[-1] == options.service_url
    assert sandbox["unit_path"].read_text() == "[Unit]\nDescription=hosted\n"


def test_install_system_restarts_active_service(manager, options, runner, sandbox, console):
    runner.responses[("systemctl", "show")] = (0, "ActiveState=active\n")

    manager.install_system(options)

    assert runner.commands[-1] == ["systemctl", "restart", "frpc"]
    assert not sandbox["unit_path"].exists()
    assert "Wrote new config; restarting frpc" in console.file.getvalue()


def test_existing_binary_is_kept_unless_forced(manager, options, sandbox):
    options.service_url = None
    sandbox["binary_path"].parent.mkdir(parents=True)
    sandbox["binary_path"].write_bytes(b"old")

    manager.install_system(options)
    assert sandbox["binary_path"].read_bytes() == b"old"

    options.force = True
    manager.install_system(options)
    assert sandbox["binary_path"].read_bytes() != b"old"


def test_install_system_cleans_up_on_failure(manager, options, sandbox):
    options.version = "9.9.9"

    with pytest.raises(DownloadError):
        manager.install_system(options)
    assert list(sandbox["work_dir"].iterdir()) == []
    assert not (sandbox["config_dir"] / "frpc.ini").exists()


def test_ensure_not_installed(manager, options, runner):
    runner.responses[("systemctl", "show")] = (0, "ActiveState=active\n")

    with pytest.raises(AlreadyInstalledError, match="use -f to override"):
        manager.ensure_not_installed(options)

    options.force = True
    manager.ensure_not_installed(options)


def test_ensure_not_installed_ignores_docker_mode(manager, options, runner):
    options.docker = True

    manager.ensure_not_installed(options)

    assert runner.commands == []


def test_install_docker(manager, options, runner):
    runner.responses[("docker", "ps")] = (0, "")

    manager.install_docker(options)

    run = runner.commands[-1]
    assert run[:6] == ["docker", "run", "--restart=always", "--network", "host", "-d"]
    assert "FRPC_IP=203.0.113.10" in run
    assert "FRPC_PORT=7000" in run
    assert "FRPC_TOKEN=abcd12345" in run
    assert "FRPC_SERVICES=http,tcp,80 https,tcp,443" in run
    assert run[-3:] == ["--name", "frpc", "privaterouterllc/frpc"]


def test_install_docker_existing_container(manager, options, runner):
    runner.responses[("docker", "ps")] = (0, "frpc\n")

    with pytest.raises(AlreadyInstalledError):
        manager.install_docker(options)

    options.force = True
    manager.install_docker(options)
    assert ["docker", "rm", "-f", "frpc"] in runner.commands


def test_install_dispatches_on_mode(manager, options, runner):
    options.docker = True
    runner.responses[("docker", "ps")] = (0, "")

    manager.install(options)

    assert not any(command[0] == "systemctl" for command in runner.commands)


def test_install_docker_installs_docker_first(options, console, sandbox):
    from frpc_installer.infrastructure.frpc import FRPCManager
    from tests.conftest import FakeDownloader

    runner = FakeRunner(available={"curl"}, responses={("docker", "ps"): (0, "")})
    downloader = FakeDownloader(texts={"https://get.docker.com": "echo install"}, console=console)
    manager = FRPCManager(runner=runner, downloader=downloader, console=console, **sandbox)

    manager.install_docker(options)

    assert runner.commands[0] == ["sh"]
    assert runner.commands[-1][:2] == ["docker", "run"]


def test_install_system_prints_version_with_markup(manager, options, console):
    options.version = "0.59.0[/x]"

    with pytest.raises(DownloadError):
        manager.install_system(options)
    assert "* Version: 0.59.0[/x]" in console.file.getvalue()
