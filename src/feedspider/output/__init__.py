"""结果导出模块"""

from .exporter import ResultExporter, build_export_filename

__all__ = ["ResultExporter", "build_export_filename"]
