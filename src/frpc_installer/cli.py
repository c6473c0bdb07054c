#!/usr/bin/env python3
"""frpc installer CLI - Install frpc as a systemd service or Docker container."""

import os
from typing import List, Optional

import click
from dotenv import find_dotenv, load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from .config import defaults
from .config.manager import ConfigManager
from .config.options import InstallOptions
from .exceptions import InstallerError, PrivilegeError
from .infrastructure.frpc import FRPCManager
from .infrastructure.history import HistoryCleaner

console = Console()

CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    "ignore_unknown_options": True,
}

EPILOG = "Example: frpc-install -s 123.456.789.012 -t abcd12345"

# Options that take a value, for spotting one left dangling at the end of the command line
VALUE_FLAGS = {
    "-s": "server",
    "--server": "server",
    "-p": "port",
    "--port": "port",
    "-t": "token",
    "--token": "token",
    "-v": "version",
    "--version": "version",
}
MISSING_VALUES = "frpc_installer.missing_values"


class InstallCommand(click.Command):
    """Shows the help and fails when called without any arguments.

    A trailing value flag such as `-s` is recorded in `ctx.meta` instead of
    failing the parse, so it ends up in the collected error report.
    """

    def parse_args(self, ctx: click.Context, args: List[str]) -> List[str]:
        if not args:
            click.echo(ctx.get_help())
            ctx.exit(1)

        args = list(args)
        missing = []
        while args and args[-1] in VALUE_FLAGS:
            missing.insert(0, VALUE_FLAGS[args.pop()])
        ctx.meta[MISSING_VALUES] = missing
        return super().parse_args(ctx, args)


def is_root() -> bool:
    return os.geteuid() == 0


def show_banner():
    console.print(
        Panel(
            "[bold]IGROMI Installer[/bold]",
            border_style="cyan",
            padding=(1, 20),
            expand=False,
        )
    )


def mask_token(token: str) -> str:
    if len(token) <= 4:
        return "*" * len(token)
    return token[:4] + "*" * (len(token) - 4)


def echo_options(options: InstallOptions, provided):
    """Echo the settings that were given on the command line, environment or config file."""
    valid = [key for key in provided if key not in options.invalid_flags]
    if "server" in valid:
        console.print(f"Using FRP Server: {escape(str(options.server))}")
    if "port" in valid:
        console.print(f"Using FRP Port: {escape(str(options.port))}")
    if "token" in valid:
        console.print(f"Using FRP Token: {escape(mask_token(str(options.token)))}")
    if "version" in valid:
        console.print(f"Using FRP Version: {escape(str(options.version))}")
    if options.force:
        console.print("[yellow]Force Install Enabled[/yellow]")
    if options.docker:
        console.print("[cyan]Docker Install Flag Detected[/cyan]")
    if options.clean:
        console.print("[cyan]Clean History Flag Detected[/cyan]")


def print_errors(errors: List[str]):
    console.print("\n[bold red]== The following Errors Were Found ==[/bold red]")
    for error in errors:
        console.print(f"\n[red]= {escape(error)}[/red]")


@click.command(cls=InstallCommand, context_settings=CONTEXT_SETTINGS, epilog=EPILOG)
@click.option("--server", "-s", envvar="FRP_SERVER", help="FRP server address (required)")
@click.option(
    "--port", "-p", envvar="FRP_PORT", help=f"FRP server port [default: {defaults.FRP_PORT}]"
)
@click.option("--token", "-t", envvar="FRP_TOKEN", help="FRP server token (required)")
@click.option(
    "--version",
    "-v",
    envvar="FRPC_VERSION",
    help=f"frp release version to install [default: {defaults.FRPC_VERSION}]",
)
@click.option("--force", "-f", is_flag=True, help="Reinstall even if frpc is already running")
@click.option("--docker", "-d", is_flag=True, help="Install frpc as a Docker container")
@click.option("--clean", "-c", is_flag=True, help="Clear shell history after install")
@click.option("--image", help=f"Docker image for --docker [default: {defaults.DOCKER_IMAGE}]")
@click.option(
    "--service-url",
    help="URL of the systemd unit to install, pass an empty string to use the built-in unit",
)
@click.option(
    "--config",
    envvar="FRPC_INSTALLER_CONFIG",
    type=click.Path(dir_okay=False),
    help="Path to a JSON configuration file",
)
@click.argument("unknown_args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], **cli_args):
    """Install and configure frpc to expose local HTTP/HTTPS ports through an FRP server."""
    try:
        if not is_root():
            raise PrivilegeError("Please run as root")

        show_banner()

        file_config = ConfigManager.load_config(config)
        merged_config = ConfigManager.merge_config_with_args(file_config, **cli_args)
        options = InstallOptions.from_config(merged_config, prog_name=ctx.info_name)
        for key in ctx.meta.get(MISSING_VALUES, []):
            if key not in options.invalid_flags:
                options.invalid_flags.append(key)
        echo_options(options, merged_config)

        frpc_manager = FRPCManager(console=console)
        frpc_manager.ensure_not_installed(options)

        errors = options.validate()
        if errors:
            print_errors(errors)
            ctx.exit(1)

        frpc_manager.install(options)

        if options.clean:
            HistoryCleaner(console=console).clean()
    except InstallerError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        ctx.exit(1)


def main():
    dotenv_path = find_dotenv(usecwd=True)
    if dotenv_path:
        load_dotenv(dotenv_path)
    cli()


if __name__ == "__main__":
    main()
