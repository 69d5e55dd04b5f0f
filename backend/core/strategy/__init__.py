"""Strategy implementations.

Each strategy lives in its own package and is pure business logic:
candles in, signals out, no I/O.
"""

from core.strategy.vegas_tunnel import (
    VegasTunnelDetector,
    VegasTunnelStrategy,
    VEGAS_TUNNEL_STRATEGY_NAME,
)

__all__ = [
    "VegasTunnelDetector",
    "VegasTunnelStrategy",
    "VEGAS_TUNNEL_STRATEGY_NAME",
]
