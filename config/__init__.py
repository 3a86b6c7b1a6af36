"""Config package facade."""

from config.loader import config_from_dict, load_config
from config.models import (
    Config,
    LanguagesConfig,
    LoggingConfig,
    PairingConfig,
    ScanConfig,
)

__all__ = [
    "Config",
    "LanguagesConfig",
    "LoggingConfig",
    "PairingConfig",
    "ScanConfig",
    "config_from_dict",
    "load_config",
]
