"""Transport layer: HTTP connection and reply stream reading."""

from .http_connection import RPCConnection
from .reader import read_raw
