"""Chat message formatting for signals and bot replies."""

from datetime import datetime, timezone

from app.symbols import SYMBOL_MAPPING, SYMBOL_NAMES, interval_label
from core.models import Alignment, IndicatorSnapshot, SignalType, TradingSignal, TriggerConditions

HELP_TEXT = """🤖 Crypto signal bot

📊 Features:
• Watches the Vegas Tunnel strategy
• Entry price with three take-profit targets
• BTC, ETH, BNB, SOL and more

📝 Commands:
• "status" - bot status
• "symbols" - supported pairs
• "price BTC" - BTC trigger prices
• "help" - this message

⚠️ Signals are for reference only and are not investment advice."""


def _symbols_text() -> str:
    lines = ["📊 Supported pairs:", ""]
    lines.extend(
        f"• {symbol}/USDT ({SYMBOL_NAMES.get(symbol, symbol)})"
        for symbol in SYMBOL_MAPPING
    )
    return "\n".join(lines)


SYMBOLS_TEXT = _symbols_text()


def format_price(price: float) -> str:
    """Format a price with precision scaled to its magnitude."""
    if price >= 1000:
        return f"{price:,.2f}"
    if price >= 1:
        return f"{price:,.4f}"
    return f"{price:,.6f}"


def format_timestamp(timestamp_ms: int | None = None) -> str:
    """Format epoch milliseconds (default: now) as a UTC string."""
    if timestamp_ms is None:
        dt = datetime.now(timezone.utc)
    else:
        dt = datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)
    return dt.strftime("%Y-%m-%d %H:%M UTC")


def format_trading_signal(signal: TradingSignal) -> str:
    """Format a trading signal as a broadcast message."""
    is_long = signal.direction == SignalType.LONG
    direction = "LONG" if is_long else "SHORT"
    emoji = "🟢" if is_long else "🔴"
    targets = signal.targets

    return (
        f"{emoji} Futures signal {emoji}\n"
        "\n"
        f"📊 Pair: {signal.symbol}/USDT\n"
        f"📈 Direction/Timeframe/Leverage: {direction}/"
        f"{interval_label(signal.timeframe)}/{signal.leverage}X\n"
        f"🎯 Entry: {format_price(signal.entry_price)}\n"
        "\n"
        "🎯 Take profit:\n"
        f"TP1 (Fibo 1.0): {format_price(targets.target1)}\n"
        f"TP2 (Fibo 1.618): {format_price(targets.target2)}\n"
        f"TP3 (Fibo 2.0): {format_price(targets.target3)}\n"
        "\n"
        "⚠️ Risk:\n"
        "🔸 Avoid chasing beyond the entry zone\n"
        "🔸 For reference only, not investment advice\n"
        "🔸 Size positions carefully\n"
        "\n"
        "📊 Strategy: Vegas Tunnel\n"
        f"⏰ Time: {format_timestamp(signal.timestamp)}\n"
        "\n"
        "💡 Always set a stop loss!"
    )


def format_trigger_message(
    symbol: str,
    current_price: float,
    indicators: IndicatorSnapshot | None,
    conditions: TriggerConditions,
) -> str:
    """Format a trigger-price report for a chat reply."""
    lines = [f"📊 {symbol} trigger price analysis", "", f"💰 Current price: {format_price(current_price)}", ""]

    if indicators is not None:
        lines.append("📈 EMA:")
        for name, value in indicators.model_dump().items():
            lines.append(f"• {name.upper()}: {format_price(value)}")
        alignment = {
            Alignment.BULLISH: "bullish",
            Alignment.BEARISH: "bearish",
        }.get(conditions.alignment, "no clear alignment")
        lines.extend(["", f"🎯 Alignment: {alignment}", ""])

    lines.extend(["⚡ Trigger conditions:", conditions.explanation, ""])

    if conditions.long_signal_price is not None:
        lines.append(f"🟢 Long trigger: {format_price(conditions.long_signal_price)}")
    if conditions.short_signal_price is not None:
        lines.append(f"🔴 Short trigger: {format_price(conditions.short_signal_price)}")

    lines.append(f"⏰ Queried: {format_timestamp()}")
    return "\n".join(lines)


def format_system_status(
    is_healthy: bool,
    uptime_seconds: float | None = None,
    tracked_pairs: int | None = None,
    recipients: int | None = None,
) -> str:
    """Format the bot status message."""
    emoji = "✅" if is_healthy else "❌"
    lines = [
        f"{emoji} System status {emoji}",
        "",
        f"🤖 Bot: {'running' if is_healthy else 'degraded'}",
        "📊 Strategy: Vegas Tunnel",
    ]
    if tracked_pairs is not None:
        lines.append(f"🔔 Tracked pairs: {tracked_pairs}")
    if recipients is not None:
        lines.append(f"💬 Active chats: {recipients}")
    if uptime_seconds is not None:
        hours, rem = divmod(int(uptime_seconds), 3600)
        lines.append(f"⏱️ Uptime: {hours}h {rem // 60}m")
    lines.append(f"⏰ Checked: {format_timestamp()}")
    return "\n".join(lines)


def format_error_message(error: str, context: str | None = None) -> str:
    """Format an error notice for a chat reply."""
    lines = ["❌ System notice ❌", "", f"🔧 Error: {error}"]
    if context:
        lines.append(f"📝 Details: {context}")
    lines.extend(["", f"⏰ Time: {format_timestamp()}"])
    return "\n".join(lines)
