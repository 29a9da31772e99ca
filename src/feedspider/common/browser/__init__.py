"""浏览器模块"""

from .session import BrowserSession, create_browser_session
from .engine import BrowserEngine, get_browser_engine, shutdown_browser_engine

__all__ = [
    "BrowserSession",
    "create_browser_session",
    "BrowserEngine",
    "get_browser_engine",
    "shutdown_browser_engine",
]
