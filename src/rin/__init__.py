"""Rin 站点后端."""

__version__ = "0.1.0"
