"""flyhttp Logging — hexagonal logging port and structlog adapter."""

from flyhttp.logging.port import LoggingPort
from flyhttp.logging.structlog_adapter import StructlogAdapter

__all__ = ["LoggingPort", "StructlogAdapter"]
