"""滚动模块"""

from .scroll_driver import ScrollDriver

__all__ = ["ScrollDriver"]
