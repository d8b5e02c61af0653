"""State namespace."""

from .bodies import BodyConfig, BodyStore, BodyView, Config  # noqa: F401
