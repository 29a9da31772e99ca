"""流水线模块"""

from .runner import run_feed_harvest, run_harvest, run_snapshot_harvest

__all__ = ["run_feed_harvest", "run_harvest", "run_snapshot_harvest"]
