"""Human-readable trigger conditions for the current tunnel alignment."""

from core.models import Alignment, IndicatorSnapshot, TriggerConditions
from core.strategy.vegas_tunnel.detector import classify_alignment


def describe_trigger(snapshot: IndicatorSnapshot) -> TriggerConditions:
    """Describe what price action would trigger the next signal.

    Stateless: it reads the alignment of the snapshot only and never
    touches a detector.
    """
    alignment = classify_alignment(snapshot)
    ema12 = snapshot.ema12
    ema144 = snapshot.ema144

    if alignment == Alignment.BULLISH:
        return TriggerConditions(
            alignment=alignment,
            long_signal_price=ema144,
            explanation=(
                f"Bullish alignment. A LONG signal triggers when price retests "
                f"EMA144 ({ema144:.4f}) and closes back at or above "
                f"EMA12 ({ema12:.4f})."
            ),
        )

    if alignment == Alignment.BEARISH:
        return TriggerConditions(
            alignment=alignment,
            short_signal_price=ema144,
            explanation=(
                f"Bearish alignment. A SHORT signal triggers when price retests "
                f"EMA144 ({ema144:.4f}) and closes back at or below "
                f"EMA12 ({ema12:.4f})."
            ),
        )

    lines = [
        "No clear alignment. Waiting for the EMAs to line up:",
        "Bullish: EMA12 > EMA144 > EMA169 > EMA576 > EMA676",
        "Bearish: EMA12 < EMA144 < EMA169 < EMA576 < EMA676",
        "",
        "Current EMA values:",
        f"EMA12: {snapshot.ema12:.4f}",
        f"EMA144: {snapshot.ema144:.4f}",
        f"EMA169: {snapshot.ema169:.4f}",
        f"EMA576: {snapshot.ema576:.4f}",
        f"EMA676: {snapshot.ema676:.4f}",
    ]
    return TriggerConditions(alignment=alignment, explanation="\n".join(lines))
