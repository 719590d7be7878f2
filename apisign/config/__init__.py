__all__ = [
    "Configuration",
    "SigningConfiguration",
    "ConfigManager",
    "config_manager",
]

from .config import (
    Configuration,
    SigningConfiguration,
    ConfigManager,
    config_manager,
)
