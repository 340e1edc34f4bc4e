"""Build, validate and send JSON-RPC commands to a bitcoin node."""

__version__ = "0.1.0"
