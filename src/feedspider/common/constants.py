"""常量定义

集中管理滚动、采集与导出相关的默认值，配置层以这些值作为环境变量缺省值。
"""

from __future__ import annotations

# ============================================================================
# 滚动相关
# ============================================================================

# 每次轮询页面高度的间隔（毫秒）
DEFAULT_POLL_INTERVAL_MS = 500
# 单次等待窗口的超时时间（毫秒）
DEFAULT_SCROLL_TIMEOUT_MS = 10_000
# 单次等待窗口内重新下发滚动指令的次数上限
DEFAULT_MAX_RETRIES = 3
# 高度增长后等待页面渲染稳定的时间（毫秒）
DEFAULT_SETTLE_MS = 1000
# 整个会话的外层迭代上限
DEFAULT_MAX_ITERATIONS = 2000
# 实际休眠超出请求时长多少毫秒视为调度受限
DEFAULT_THROTTLE_SLACK_MS = 200

# ============================================================================
# 链接采集相关
# ============================================================================

DEFAULT_DOMAIN_MARKER = "tiktok.com"
DEFAULT_OWNER_SIGIL = "@"
DEFAULT_VIDEO_SEGMENT = "/video/"
DEFAULT_PHOTO_SEGMENT = "/photo/"
# 没有任何可解析作者时使用的占位名
NO_OWNER_PLACEHOLDER = "NO_USER_GIVEN"

# ============================================================================
# 导出相关
# ============================================================================

DEFAULT_OUTPUT_DIR = "output"
DEFAULT_EXPORT_SUFFIX = "TiktokData"
EXPORT_FILE_EXTENSION = ".txt"

# ============================================================================
# 浏览器与输入验证
# ============================================================================

DEFAULT_PAGE_TIMEOUT_MS = 30_000
MAX_URL_LENGTH = 2048
VALID_URL_SCHEMES = ("http", "https")
