#!/usr/bin/env python3
"""
Check the Vegas Tunnel against live Binance candles.

Prints the five EMAs, the alignment and the trigger conditions for each
symbol, for manual comparison with a charting platform. Detector state is
not touched.

Usage:
    cd backend
    python scripts/check_tunnel.py                  # configured symbols
    python scripts/check_tunnel.py BTC ETH -t 4h    # explicit symbols/timeframe
"""

import argparse
import asyncio
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.clients import BinanceRestClient  # noqa: E402
from app.config import get_settings  # noqa: E402
from app.errors import VegasError  # noqa: E402
from app.services import SignalService  # noqa: E402
from app.services.formatter import format_trigger_message  # noqa: E402


async def check(symbols: list[str], timeframe: str) -> int:
    settings = get_settings()
    client = BinanceRestClient(base_url=settings.binance_base_url)
    service = SignalService(client, candle_limit=settings.candle_limit)
    failures = 0

    try:
        for symbol in symbols:
            print("=" * 60)
            try:
                report = await service.trigger_price(symbol, timeframe)
            except VegasError as e:
                print(f"[FAIL] {symbol}: {e}")
                failures += 1
                continue

            if report.conditions is None:
                print(f"[SKIP] {symbol}: {report.explanation}")
                continue

            print(format_trigger_message(
                report.symbol,
                report.current_price,
                report.indicators,
                report.conditions,
            ))
    finally:
        await client.close()

    return failures


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Check Vegas Tunnel levels")
    parser.add_argument("symbols", nargs="*", default=settings.symbols)
    parser.add_argument("-t", "--timeframe", default=settings.timeframe)
    args = parser.parse_args()

    failures = asyncio.run(check(args.symbols, args.timeframe))
    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    main()
