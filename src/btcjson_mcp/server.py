"""MCP server entry point for bitcoin JSON-RPC nodes.

Exposes tools, resources, and prompts via the Model Context Protocol
using the official Python MCP SDK with stdio transport.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any

from mcp.server.fastmcp import FastMCP

from .models.amounts import json_to_amount
from .protocol.commands import (
    build_get_balance,
    build_get_block_hash,
    build_send_to_address,
)
from .protocol.errors import BtcJsonError, ValidationError
from .protocol.framing import Request, build_request
from .protocol.parser import parse_reply, parse_result
from .protocol.registry import DEFAULT_REGISTRY
from .transport.http_connection import DEFAULT_HOST, DEFAULT_PORT, RPCConnection

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "btcjson",
    instructions="MCP server for bitcoin-style JSON-RPC nodes",
)

# Global connection state
_connection: RPCConnection | None = None


def _get_connection() -> RPCConnection:
    """Get the active RPC connection, raising if not connected."""
    if _connection is None or not _connection.connected:
        raise RuntimeError(
            "Not connected to a node. Use the 'connect' tool first."
        )
    return _connection


def _send(request: Request) -> dict[str, Any]:
    """Send a built request and shape the reply for a tool result."""
    conn = _get_connection()
    try:
        reply = parse_reply(conn.send(request.to_bytes()))
        result = parse_result(request.method, reply)
    except BtcJsonError as e:
        return {"error": str(e)}
    if hasattr(result, "to_dict"):
        result = result.to_dict()
    elif isinstance(result, list):
        result = [r.to_dict() if hasattr(r, "to_dict") else r for r in result]
    return {"result": result, "id": reply.id}


# ─── CONNECTION TOOLS ─────────────────────────────────────────────────

@mcp.tool()
def connect(
    host: str | None = None,
    port: int | None = None,
    user: str | None = None,
    password: str | None = None,
    use_tls: bool = False,
) -> dict[str, Any]:
    """Open a JSON-RPC connection to a node.

    Unset arguments fall back to the BTCJSON_RPC_HOST, BTCJSON_RPC_PORT,
    BTCJSON_RPC_USER and BTCJSON_RPC_PASSWORD environment variables.
    No request is made until the first command is sent.
    """
    global _connection
    if _connection is not None and _connection.connected:
        return {"connected": True, "message": "Already connected", "url": _connection.url}

    try:
        resolved_port = port or int(os.environ.get("BTCJSON_RPC_PORT", DEFAULT_PORT))
    except ValueError:
        return {"error": "BTCJSON_RPC_PORT must be an integer"}

    _connection = RPCConnection(
        host=host or os.environ.get("BTCJSON_RPC_HOST", DEFAULT_HOST),
        port=resolved_port,
        user=user if user is not None else os.environ.get("BTCJSON_RPC_USER", ""),
        password=(
            password if password is not None
            else os.environ.get("BTCJSON_RPC_PASSWORD", "")
        ),
        use_tls=use_tls,
    )
    _connection.open()
    return {"connected": True, "url": _connection.url}


@mcp.tool()
def disconnect() -> dict[str, bool]:
    """Close the connection to the node."""
    global _connection
    if _connection is None:
        return {"disconnected": True}
    _connection.close()
    _connection = None
    return {"disconnected": True}


# ─── COMMAND TOOLS ────────────────────────────────────────────────────

@mcp.tool()
def list_commands() -> dict[str, Any]:
    """List every supported command with its argument usage."""
    return {
        "commands": [
            {"name": name, "usage": DEFAULT_REGISTRY.lookup(name).usage()}
            for name in DEFAULT_REGISTRY
        ]
    }


@mcp.tool()
def describe_command(command: str) -> dict[str, Any]:
    """Describe the arguments a command accepts.

    Args:
        command: Command name, e.g. "sendfrom".
    """
    try:
        return DEFAULT_REGISTRY.lookup(command).to_dict()
    except ValidationError as e:
        return {"error": str(e)}


@mcp.tool()
def create_message(command: str, args: list[Any] | None = None) -> dict[str, Any]:
    """Validate a command and return the JSON-RPC request without sending it.

    Integers and floats are distinct: pass 1.0 where an amount is expected.

    Args:
        command: Command name.
        args: Positional arguments in order.
    """
    try:
        request = build_request(command, *(args or []))
    except ValidationError as e:
        return {"error": str(e)}
    return {"message": request.to_dict()}


@mcp.tool()
def rpc_command(command: str, args: list[Any] | None = None) -> dict[str, Any]:
    """Validate a command, send it to the node and return the result.

    Args:
        command: Command name.
        args: Positional arguments in order.
    """
    try:
        request = build_request(command, *(args or []))
    except ValidationError as e:
        return {"error": str(e)}
    return _send(request)


@mcp.tool()
def get_info() -> dict[str, Any]:
    """Read node state: version, block height, connections, balance."""
    return _send(build_request("getinfo"))


@mcp.tool()
def get_block_count() -> dict[str, Any]:
    """Read the height of the longest chain."""
    return _send(build_request("getblockcount"))


@mcp.tool()
def get_block_hash(index: int) -> dict[str, Any]:
    """Read the hash of the block at a height.

    Args:
        index: Block height.
    """
    try:
        request = build_get_block_hash(index)
    except ValidationError as e:
        return {"error": str(e)}
    return _send(request)


@mcp.tool()
def get_balance(account: str | None = None, minconf: int | None = None) -> dict[str, Any]:
    """Read a wallet balance in BTC and satoshi.

    Args:
        account: Account name; omit for the whole wallet.
        minconf: Minimum confirmations (requires account).
    """
    try:
        request = build_get_balance(account, minconf)
    except ValueError as e:
        return {"error": str(e)}

    response = _send(request)
    if "error" in response:
        return response
    balance = response["result"]
    try:
        response["satoshi"] = json_to_amount(balance)
    except ValueError as e:
        logger.warning("Unexpected balance %r: %s", balance, e)
    return response


@mcp.tool()
def send_to_address(
    address: str,
    amount: float,
    comment: str | None = None,
    comment_to: str | None = None,
) -> dict[str, Any]:
    """Send BTC to an address.

    Args:
        address: Destination address.
        amount: Amount in BTC.
        comment: Optional wallet comment.
        comment_to: Optional recipient comment (requires comment).
    """
    try:
        request = build_send_to_address(address, float(amount), comment, comment_to)
    except ValueError as e:
        return {"error": str(e)}
    return _send(request)


# ─── MCP RESOURCES ───────────────────────────────────────────────────

@mcp.resource("btcjson://commands/list")
def resource_commands_list() -> str:
    """All supported commands with their signatures."""
    commands = [DEFAULT_REGISTRY.lookup(name).to_dict() for name in DEFAULT_REGISTRY]
    return json.dumps({"commands": commands, "count": len(commands)})


@mcp.resource("btcjson://connection/status")
def resource_connection_status() -> str:
    """Connection state and node URL."""
    if _connection is None or not _connection.connected:
        return json.dumps({"connected": False})
    return json.dumps({"connected": True, "url": _connection.url})


# ─── MCP PROMPTS ─────────────────────────────────────────────────────

@mcp.prompt()
def diagnose_node(symptom: str) -> str:
    """Guide the AI through checking the health of a node.

    Args:
        symptom: What looks wrong, e.g. "not syncing".
    """
    return f"""Investigate a node showing this symptom: {symptom}
Steps:
- Use get_info for version, block height, connections and errors
- Use rpc_command with getpeerinfo to inspect connected peers
- Use get_block_count twice a minute apart to see whether the chain advances
- Use rpc_command with getmininginfo for difficulty and mempool size

Use describe_command before calling a command you have not used yet."""


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
