"""Vegas Tunnel strategy package.

EMA12 acts as the filter line, EMA144/169 as the inner tunnel and
EMA576/676 as the outer tunnel. A signal fires when price retests the
inner tunnel inside a fully ordered trend and closes back beyond EMA12.
"""

from core.strategy.vegas_tunnel.detector import (
    VegasTunnelDetector,
    classify_alignment,
    transition,
)
from core.strategy.vegas_tunnel.generator import VegasTunnelStrategy
from core.strategy.vegas_tunnel.models import (
    TunnelState,
    VEGAS_TUNNEL_STRATEGY_NAME,
)
from core.strategy.vegas_tunnel.snapshot import build_snapshot
from core.strategy.vegas_tunnel.targets import project_targets
from core.strategy.vegas_tunnel.trigger import describe_trigger

__all__ = [
    "VegasTunnelDetector",
    "VegasTunnelStrategy",
    "TunnelState",
    "VEGAS_TUNNEL_STRATEGY_NAME",
    "build_snapshot",
    "classify_alignment",
    "describe_trigger",
    "project_targets",
    "transition",
]
