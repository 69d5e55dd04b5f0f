"""Core shared logic for Vegas Tunnel signal generation.

This package contains pure business logic with no I/O dependencies
(no Redis or network access). The web service in app/ fetches candles,
hands them to the strategy here, and delivers whatever comes back.
"""
