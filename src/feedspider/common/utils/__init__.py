"""通用工具模块"""

from .file_utils import (
    ensure_directory,
    load_bytes,
    write_text_atomic,
)

__all__ = [
    "ensure_directory",
    "load_bytes",
    "write_text_atomic",
]
