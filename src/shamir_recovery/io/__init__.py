from .loader import load_share_document

__all__ = ["load_share_document"]
