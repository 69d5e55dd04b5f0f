"""Vegas Tunnel signal bot web service."""
