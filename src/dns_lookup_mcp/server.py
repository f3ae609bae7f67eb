"""MCP server exposing the measured DNS lookups."""

import asyncio
import json
import logging
import os
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from dns_lookup_mcp.lookups import DNS

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Name the lookup catalog is registered under
NAMESPACE = "dns-lookup"


def _string(description: str) -> dict[str, str]:
    return {"type": "string", "description": description}


HOST = _string("Host name to resolve")
NAME = _string("Domain name to query")
NETWORK_IP = _string("Address family: 'ip' (both), 'ip4' or 'ip6'")

# (description, properties) per lookup, keyed by the DNS method name
LOOKUPS: dict[str, tuple[str, dict[str, dict[str, str]]]] = {
    "lookup_addr": (
        "Reverse lookup: host names for an IP address.",
        {"addr": _string("IPv4 or IPv6 address")},
    ),
    "lookup_cname": (
        "Canonical name of a host after following CNAME records.",
        {"host": HOST},
    ),
    "lookup_host": (
        "Forward lookup: addresses of a host.",
        {"host": HOST},
    ),
    "lookup_ip": (
        "IP addresses of a host for an address family.",
        {"network": NETWORK_IP, "host": HOST},
    ),
    "lookup_ip_addr": (
        "IP addresses of a host, with IPv6 zones where present.",
        {"host": HOST},
    ),
    "lookup_mx": (
        "Mail exchange records of a domain.",
        {"name": NAME},
    ),
    "lookup_ns": (
        "Name server records of a domain.",
        {"name": NAME},
    ),
    "lookup_netip": (
        "IP addresses of a host for an address family.",
        {"network": NETWORK_IP, "host": HOST},
    ),
    "lookup_port": (
        "Port number of a named service.",
        {
            "network": _string("'tcp', 'udp', their 4/6 variants, or '' for either"),
            "service": _string("Service name (e.g. 'https') or port number"),
        },
    ),
    "lookup_srv": (
        "Service records for _service._proto.name, or name itself when service and proto are empty.",
        {
            "service": _string("Service name without the leading underscore"),
            "proto": _string("Protocol name without the leading underscore"),
            "name": NAME,
        },
    ),
    "lookup_txt": (
        "Text records of a domain.",
        {"name": NAME},
    ),
}

TOOLS = [
    Tool(
        name=name,
        description=description,
        inputSchema={
            "type": "object",
            "properties": properties,
            "required": list(properties),
        },
    )
    for name, (description, properties) in LOOKUPS.items()
]


def error_reply(message: str) -> dict[str, Any]:
    """Envelope for a call that never reached a lookup."""
    return {"err": message, "duration": 0.0}


def dispatch(handler: DNS, name: str, arguments: dict[str, Any]) -> dict[str, Any]:
    """Run one lookup by tool name and render its response."""
    if name not in LOOKUPS:
        return error_reply(f"Unknown tool: {name}")

    lookup = getattr(handler, name)
    return lookup(**arguments).to_dict()


def run_tool(handler: DNS, name: str, arguments: dict[str, Any]) -> dict[str, Any]:
    """Dispatch a tool call, turning bad arguments into an error reply."""
    try:
        return dispatch(handler, name, arguments)
    except Exception as e:
        logger.error(f"Tool {name} failed: {e}")
        return error_reply(str(e))


def create_server() -> Server:
    """Create and configure the MCP server."""
    server = Server(NAMESPACE)
    handler = DNS()

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """List available DNS lookups."""
        return TOOLS

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        """Handle tool calls."""
        logger.info(f"Tool call: {name} with arguments: {arguments}")

        result = await asyncio.to_thread(run_tool, handler, name, arguments or {})
        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    return server


def main():
    """Run the MCP server."""
    server = create_server()

    async def run():
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())

    asyncio.run(run())


if __name__ == "__main__":
    main()
