"""
Read and write APIs, split by responsibility.

- queries: ItemReadApi (all, count)
- commands: ItemWriteApi (create, update)
"""

from .commands import ItemWriteApi
from .queries import ItemReadApi

__all__ = [
    "ItemReadApi",
    "ItemWriteApi",
]
