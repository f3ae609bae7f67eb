"""Measured DNS lookups served over MCP."""

from dns_lookup_mcp.lookups import DNS

__all__ = ["DNS"]
