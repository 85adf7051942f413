"""
Screenshot Sort Domain

Watches a screenshot directory and files every new screenshot into a
date-partitioned tree:
- Dated screenshots (YYYY-MM-DD*.png) -> <root>/YYYY/MM/DD/
- Everything else -> <root>/other/
- <root>/latest -> symlink to the newest day partition
"""

__all__ = ["classifier", "latest", "mover", "reconciler", "shutdown", "stream", "watchers"]
