"""Fibonacci take-profit projection."""

from core.models import DEFAULT_CONFIG, SignalType, TargetLevels, VegasTunnelConfig


def project_targets(
    entry_price: float,
    direction: SignalType | str,
    swing_high: float | None = None,
    swing_low: float | None = None,
    config: VegasTunnelConfig = DEFAULT_CONFIG,
) -> TargetLevels:
    """
    Project take-profit levels from an entry.

    target_n = entry +/- range * fib_n, where range is the swing range when
    both bounds are given, otherwise ``entry * default_range_pct``.

    Args:
        entry_price: Entry (trigger) price
        direction: LONG or SHORT
        swing_high: Recent swing high (optional)
        swing_low: Recent swing low (optional)
        config: Strategy parameters

    Returns:
        TargetLevels with target1..target3

    Raises:
        ValueError: If direction is NONE
    """
    direction = SignalType(direction)
    if direction == SignalType.NONE:
        raise ValueError("Cannot project targets without a direction")

    if swing_high is not None and swing_low is not None:
        base_range = abs(swing_high - swing_low)
    else:
        base_range = entry_price * config.default_range_pct

    sign = 1.0 if direction == SignalType.LONG else -1.0
    fib1, fib2, fib3 = config.fib_multipliers

    return TargetLevels(
        target1=entry_price + sign * base_range * fib1,
        target2=entry_price + sign * base_range * fib2,
        target3=entry_price + sign * base_range * fib3,
    )
