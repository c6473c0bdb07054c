"""systemd service management."""

from typing import Optional

from .shell import CommandRunner


class SystemdManager:
    """Wraps the systemctl calls the installer needs."""

    def __init__(self, runner: Optional[CommandRunner] = None):
        self.runner = runner or CommandRunner()

    def active_state(self, unit: str) -> str:
        """Return the unit's ActiveState, e.g. 'active' or 'inactive'."""
        result = self.runner.run(["systemctl", "show", "-p", "ActiveState", unit], check=False)
        if result.returncode != 0:
            return "unknown"
        for line in result.stdout.splitlines():
            if line.startswith("ActiveState="):
                return line[len("ActiveState="):].strip()
        return "unknown"

    def is_active(self, unit: str) -> bool:
        return self.active_state(unit) == "active"

    def daemon_reload(self) -> None:
        self.runner.run(["systemctl", "daemon-reload"])

    def enable(self, unit: str) -> None:
        self.runner.run(["systemctl", "enable", unit])

    def start(self, unit: str) -> None:
        self.runner.run(["systemctl", "start", unit])

    def restart(self, unit: str) -> None:
        self.runner.run(["systemctl", "restart", unit])
