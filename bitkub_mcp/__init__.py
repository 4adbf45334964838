"""
Bitkub MCP - Bitkub exchange REST API exposed as Model Context Protocol tools.

Market data tools use the public endpoints; account, order and wallet tools
sign requests with the configured API key and secret.
"""

__version__ = "1.0.0"
