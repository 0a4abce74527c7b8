"""Configuration management for cyberfeed."""

from .loader import Config, load_config, save_config
from .models import ConfigModel, DisplayConfig, FeedsConfig, LLMConfig, TransportConfig

__all__ = [
    "Config",
    "ConfigModel",
    "DisplayConfig",
    "FeedsConfig",
    "LLMConfig",
    "TransportConfig",
    "load_config",
    "save_config",
]
