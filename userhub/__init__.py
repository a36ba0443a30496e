"""Userhub: user accounts with soft-delete and profile photographs."""

__version__ = "0.1.0"
