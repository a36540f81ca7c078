"""
text2slack - deliver text messages to chat webhooks over MCP
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("text2slack-mcp")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"
__logo__ = "💬"
