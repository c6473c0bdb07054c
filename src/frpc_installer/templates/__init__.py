"""Template files for frpc configuration."""

from .frpc_templates import render_frpc_ini, render_systemd_unit

__all__ = ["render_frpc_ini", "render_systemd_unit"]
