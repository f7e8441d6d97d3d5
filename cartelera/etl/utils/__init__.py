"""Pipeline utilities package: logging and request throttling."""

from cartelera.etl.utils.logger import setup_logger
from cartelera.etl.utils.throttle import RequestThrottle

__all__ = ["RequestThrottle", "setup_logger"]
