"""flyhttp Core — Configuration."""

from flyhttp.core.config import Config, config_properties

__all__ = [
    "Config",
    "config_properties",
]
