# noqa: D104 - package initialization
from .logging import JsonFormatter, RequestContextFilter, configure_structured_logging  # noqa: F401
