"""Business services."""

from app.services.line_bot import LineBot
from app.services.signal_service import SignalService, TriggerReport

__all__ = [
    "LineBot",
    "SignalService",
    "TriggerReport",
]
