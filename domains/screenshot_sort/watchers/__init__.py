"""
Watchers for the Screenshot Sort domain.

- filesystem: watchdog handler and the blocking watch loop
"""

__all__ = ["filesystem"]
