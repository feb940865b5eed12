from .extractor import extract, parse_identifier
from .models import Point, ReconstructionRequest, Share, ShareMeta, ShareRecord

__all__ = [
    "extract",
    "parse_identifier",
    "Point",
    "ReconstructionRequest",
    "Share",
    "ShareMeta",
    "ShareRecord",
]
