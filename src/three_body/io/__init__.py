"""Config file I/O."""

from .config import (  # noqa: F401
    config_from_definition,
    config_to_definition,
    default_config,
    default_definition,
    load_config,
    save_config,
)
