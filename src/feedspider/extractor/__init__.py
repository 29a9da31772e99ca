"""链接采集模块"""

from .link_harvester import (
    LinkHarvester,
    classify_link,
    dedupe,
    extract_owner,
    tally_owners,
)

__all__ = [
    "LinkHarvester",
    "classify_link",
    "dedupe",
    "extract_owner",
    "tally_owners",
]
