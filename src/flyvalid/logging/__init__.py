"""flyvalid Logging — hexagonal logging port and structlog adapter."""

from flyvalid.logging.port import LoggingPort
from flyvalid.logging.structlog_adapter import StructlogAdapter

__all__ = ["LoggingPort", "StructlogAdapter"]
