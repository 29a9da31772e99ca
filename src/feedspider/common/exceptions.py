"""自定义异常类

定义项目中使用的所有自定义异常，用于更精细的错误处理。

注意：作者无法解析的链接、滚动停滞与迭代上限都属于正常的终止/降级路径，
不在此处建模为异常。
"""

from __future__ import annotations


class FeedSpiderError(Exception):
    """FeedSpider 基础异常类

    所有自定义异常的基类。
    """
    pass


class InvalidArgumentError(FeedSpiderError):
    """参数非法

    回调与调用模式的组合不合法时，在开始滚动之前同步抛出。
    """
    pass


class BrowserError(FeedSpiderError):
    """浏览器相关错误的基类"""
    pass


class PageLoadError(BrowserError):
    """页面加载失败

    当页面无法在超时时间内加载完成时抛出。
    """
    def __init__(self, url: str, message: str = "页面加载失败"):
        super().__init__(f"{message}: {url}")
        self.url = url


class SnapshotError(FeedSpiderError):
    """页面快照无法读取或解析"""
    def __init__(self, path: str, reason: str = "无法读取"):
        super().__init__(f"页面快照{reason}: {path}")
        self.path = path
        self.reason = reason


class ExportError(FeedSpiderError):
    """结果导出失败"""
    def __init__(self, path: str, reason: str = "写入失败"):
        super().__init__(f"导出{reason}: {path}")
        self.path = path
        self.reason = reason


class ValidationError(FeedSpiderError):
    """验证失败错误"""
    pass


class URLValidationError(ValidationError):
    """URL 验证失败"""
    def __init__(self, url: str, reason: str = "格式无效"):
        super().__init__(f"URL 验证失败: {url}, 原因: {reason}")
        self.url = url
        self.reason = reason


class ConfigError(FeedSpiderError):
    """配置相关错误"""
    pass
