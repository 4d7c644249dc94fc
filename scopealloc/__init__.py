"""Scoped allocation tracking: a context that records buffers on a stack or list and releases them."""

__version__ = "1.5.2"
__all__ = ["codes", "pointer", "memstack", "memlist", "context"]