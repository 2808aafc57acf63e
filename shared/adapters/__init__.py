from .datamuse_adapter import DatamuseAdapter, RelatedWord

__all__ = ["DatamuseAdapter", "RelatedWord"]
