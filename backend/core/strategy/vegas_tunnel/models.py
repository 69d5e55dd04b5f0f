"""Vegas Tunnel detector state."""

from dataclasses import dataclass

from core.models.signal import Alignment

VEGAS_TUNNEL_STRATEGY_NAME = "vegas_tunnel"


@dataclass(frozen=True, slots=True)
class TunnelState:
    """Detector state for one symbol/timeframe pair.

    ``armed`` means price has already touched the inner tunnel (EMA144)
    and the detector is waiting for a confirming close beyond EMA12.
    """

    alignment: Alignment = Alignment.NONE
    armed: bool = False


INITIAL_STATE = TunnelState()
