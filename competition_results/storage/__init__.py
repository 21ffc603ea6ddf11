"""
Storage implementations.

Provides implementations of the ResultStore interface.

Available implementations:
- InMemoryResultStore: Lock-guarded dictionary, lives for the process lifetime
"""

from .memory_storage import InMemoryResultStore

__all__ = ["InMemoryResultStore"]
