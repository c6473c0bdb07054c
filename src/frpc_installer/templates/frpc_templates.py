"""Templates for frpc configuration and service files."""

FRPC_INI_TEMPLATE = """[common]
server_addr = {server}
server_port = {port}
token = {token}
{proxies}"""

FRPC_PROXY_TEMPLATE = """
[{name}]
type = {type}
local_ip = {local_ip}
local_port = {local_port}
remote_port = {remote_port}
"""

SYSTEMD_UNIT_TEMPLATE = """[Unit]
Description=Frp Client Service
After=network-online.target
Wants=network-online.target

[Service]
Type=simple
User=root
Restart=on-failure
RestartSec=5s
ExecStart={binary_path} -c {config_path}
ExecReload={binary_path} reload -c {config_path}
LimitNOFILE=1048576

[Install]
WantedBy=multi-user.target
"""


def render_frpc_ini(options) -> str:
    """Render frpc.ini for the given install options."""
    proxies = "".join(
        FRPC_PROXY_TEMPLATE.format(
            name=service.name,
            type=service.type,
            local_ip=service.local_ip,
            local_port=service.local_port,
            remote_port=service.remote_port,
        )
        for service in options.services
    )
    return FRPC_INI_TEMPLATE.format(
        server=options.server,
        port=options.port,
        token=options.token,
        proxies=proxies,
    )


def render_systemd_unit(binary_path, config_path) -> str:
    return SYSTEMD_UNIT_TEMPLATE.format(binary_path=binary_path, config_path=config_path)
