#Marks storage as a package.
#Re-exports the store protocol and the in-memory store so callers can do
#`from storage import InMemoryDispatchStore` without knowing file names.
#No business logic.

from .base import DispatchStore
from .memory import InMemoryDispatchStore

__all__ = [
    "DispatchStore",
    "InMemoryDispatchStore",
]
