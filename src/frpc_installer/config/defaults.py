"""Default values for the frpc installer."""

from pathlib import Path

# https://github.com/fatedier/frp/releases/
FRPC_VERSION = "0.59.0"
FRP_PORT = 7000

FRP_RELEASE_URL = "https://github.com/fatedier/frp/releases/download/v{version}/{filename}"

# The release tarballs no longer ship a unit file, so it is fetched from here
FRPC_SERVICE_URL = "https://raw.githubusercontent.com/tdcomcl/frpc/main/frpc.service"

DOCKER_INSTALL_URL = "https://get.docker.com"
DOCKER_IMAGE = "privaterouterllc/frpc"

SERVICE_NAME = "frpc"
CONTAINER_NAME = "frpc"

FRP_CONFIG_DIR = Path("/etc/frp")
FRPC_CONFIG_FILE = "frpc.ini"
FRPC_BINARY_PATH = Path("/usr/bin/frpc")
SYSTEMD_UNIT_PATH = Path("/etc/systemd/system/frpc.service")
WORK_DIR = Path("/tmp")

DOWNLOAD_TIMEOUT = 60

DEFAULT_SERVICES = [
    {"name": "http", "type": "tcp", "local_ip": "127.0.0.1", "local_port": 80, "remote_port": 80},
    {"name": "https", "type": "tcp", "local_ip": "127.0.0.1", "local_port": 443, "remote_port": 443},
]
