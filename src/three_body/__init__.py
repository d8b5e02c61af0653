"""Gravitating N-body simulation with interactive spawning and trails."""

__version__ = "0.1.0"
