"""结果导出

把过滤后的 URL 列表写成文本文件，每行一个 URL，文件名形如
``<作者>_<年>_<月>_<日>_<后缀>.txt``。
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

from ..common.config import config
from ..common.constants import EXPORT_FILE_EXTENSION
from ..common.exceptions import ExportError
from ..common.logger import get_logger
from ..common.types import HarvestResult
from ..common.utils import ensure_directory, write_text_atomic
from ..common.validators import owner_file_component

logger = get_logger(__name__)


def build_export_filename(owner: str, run_date: date, suffix: str) -> str:
    """生成导出文件名，月与日补齐两位"""
    stamp = f"{run_date.year}_{run_date.month:02d}_{run_date.day:02d}"
    return f"{owner_file_component(owner)}_{stamp}_{suffix}{EXPORT_FILE_EXTENSION}"


class ResultExporter:
    """结果导出器"""

    def __init__(self, output_dir: str | Path | None = None, suffix: str | None = None):
        self.output_dir = Path(output_dir or config.export.output_dir)
        self.suffix = suffix or config.export.suffix

    def export(self, result: HarvestResult, owner: str | None = None, run_date: date | None = None) -> Path:
        """写出导出文件

        Args:
            result: 采集结果
            owner: 文件名中使用的作者名，默认取 result.owner
            run_date: 文件名中使用的日期，默认当天

        Returns:
            导出文件路径

        Raises:
            ExportError: 输出目录无法创建或文件写入失败
        """
        owner = owner or result.owner
        run_date = run_date or date.today()
        target = self.output_dir / build_export_filename(owner, run_date, self.suffix)

        if not ensure_directory(self.output_dir):
            raise ExportError(str(self.output_dir), "目录创建失败")

        try:
            write_text_atomic(target, "\n".join(result.urls))
        except OSError as e:
            raise ExportError(str(target), f"写入失败 ({e})") from e

        logger.info(f"[Export] 已导出 {len(result.links)} 条链接: {target}")
        return target
