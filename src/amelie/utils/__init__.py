from .concurrency import gather_ordered

__all__ = ["gather_ordered"]
