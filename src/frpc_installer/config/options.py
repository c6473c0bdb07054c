"""Install options and their validation."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from . import defaults
from ..exceptions import ConfigurationError


@dataclass
class ProxyService:
    """A local port published through the FRP server."""

    name: str
    local_port: int
    remote_port: int
    type: str = "tcp"
    local_ip: str = "127.0.0.1"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProxyService":
        return cls(
            name=data["name"],
            local_port=int(data["local_port"]),
            remote_port=int(data.get("remote_port", data["local_port"])),
            type=data.get("type", "tcp"),
            local_ip=data.get("local_ip", "127.0.0.1"),
        )


def default_services() -> List[ProxyService]:
    return [ProxyService.from_dict(service) for service in defaults.DEFAULT_SERVICES]


def parse_service(data: Any) -> ProxyService:
    """Build a ProxyService from a config file entry."""
    try:
        return ProxyService.from_dict(data)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ConfigurationError(f"Invalid service entry {data!r} in config: {e!r}") from e


# Flag labels used in error messages, keyed by option name
FLAG_LABELS = {
    "server": ("FRP Server", "-s"),
    "port": ("FRP Port", "-p"),
    "token": ("FRP Token", "-t"),
    "version": ("FRP Version", "-v"),
}


@dataclass
class InstallOptions:
    """Everything the installer needs to know about one run."""

    server: Optional[str] = None
    port: Any = defaults.FRP_PORT
    token: Optional[str] = None
    version: str = defaults.FRPC_VERSION
    force: bool = False
    docker: bool = False
    clean: bool = False
    image: str = defaults.DOCKER_IMAGE
    service_url: Optional[str] = defaults.FRPC_SERVICE_URL
    services: List[ProxyService] = field(default_factory=default_services)
    invalid_flags: List[str] = field(default_factory=list)
    unknown_args: List[str] = field(default_factory=list)

    @classmethod
    def from_config(cls, merged: Dict[str, Any], prog_name: str = "frpc-install") -> "InstallOptions":
        """Build options from a merged config dict, rejecting flag-like values."""
        options = cls()
        for key in FLAG_LABELS:
            value = merged.get(key)
            if value is None:
                continue
            if isinstance(value, str) and (not value or value.startswith("-")):
                options.invalid_flags.append(key)
                continue
            setattr(options, key, value)

        for key in ("force", "docker", "clean"):
            setattr(options, key, bool(merged.get(key, False)))

        if merged.get("image"):
            options.image = merged["image"]
        if "service_url" in merged:
            options.service_url = merged["service_url"] or None
        if merged.get("services"):
            options.services = [parse_service(service) for service in merged["services"]]

        options.unknown_args = [
            f"{arg} is not a valid argument for {prog_name}" for arg in merged.get("unknown_args", [])
        ]
        return options

    def validate(self) -> List[str]:
        """Return a list of human readable errors, empty when the options are usable."""
        errors = []
        for key in self.invalid_flags:
            label, flag = FLAG_LABELS[key]
            errors.append(f"Invalid {label} passed to {flag}")
        errors.extend(self.unknown_args)

        if not self.server:
            errors.append("FRP Server is required")
        if not self.token:
            errors.append("FRP Token is required")

        if "port" not in self.invalid_flags:
            try:
                port = int(self.port)
            except (TypeError, ValueError):
                port = 0
            if not 1 <= port <= 65535:
                errors.append("Invalid FRP Port passed to -p")
            else:
                self.port = port

        return errors

    def frpc_services_env(self) -> str:
        """Render proxies the way the frpc container image expects them."""
        return " ".join(
            f"{service.name},{service.type},{service.local_port}" for service in self.services
        )
