"""Request and response stores for response cookie resolution.

The store protocols describe what the host must provide. The in-memory
implementations back tests and the demo.

Available Stores:
    - MemoryRequestStore: In-memory request definitions
    - MemoryResponseStore: In-memory response history per environment
"""

from response_cookie.storage.base import RequestStore, ResponseStore
from response_cookie.storage.memory import MemoryRequestStore, MemoryResponseStore

__all__ = [
    "RequestStore",
    "ResponseStore",
    "MemoryRequestStore",
    "MemoryResponseStore",
]
