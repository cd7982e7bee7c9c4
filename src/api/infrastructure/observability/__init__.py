"""Domain-oriented observability infrastructure.

This module provides domain probes following the Domain Oriented Observability
pattern described by Martin Fowler, plus the request logging middleware that
correlates every log event of a request through its request id.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from shared_kernel.observability_context import ObservationContext
from infrastructure.observability.probes import (
    ConnectionProbe,
    DefaultConnectionProbe,
)
from infrastructure.observability.request_logging import (
    REQUEST_ID_HEADER,
    RequestLoggingMiddleware,
)

__all__ = [
    "ConnectionProbe",
    "DefaultConnectionProbe",
    "ObservationContext",
    "REQUEST_ID_HEADER",
    "RequestLoggingMiddleware",
]
