"""Turn a raw share document into a validated ReconstructionRequest."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, List, Optional, Tuple, Union

from pydantic import ValidationError

from ..errors import (
    DuplicateIdentifierError,
    InsufficientSharesError,
    InvalidBaseError,
    InvalidShareIdentifierError,
    InvalidThresholdError,
    MalformedInputError,
    ShareCountMismatch,
)
from ..utils.logging import get_logger
from .models import ReconstructionRequest, Share, ShareMeta, ShareRecord

logger = get_logger(__name__)

DEFAULT_METADATA_KEY = "keys"

RawDocument = Union[Mapping, Iterable[Tuple[Any, Any]]]


def parse_identifier(identifier: Any) -> int:
    """Parse a share key such as ``"3"`` into a positive x coordinate."""
    if isinstance(identifier, bool):
        raise InvalidShareIdentifierError(identifier)
    if isinstance(identifier, int):
        x = identifier
    elif isinstance(identifier, str) and identifier.isascii() and identifier.isdigit():
        x = int(identifier)
    else:
        raise InvalidShareIdentifierError(identifier)
    if x < 1:
        raise InvalidShareIdentifierError(identifier)
    return x


def _pairs(raw: RawDocument) -> List[Tuple[Any, Any]]:
    if isinstance(raw, Mapping):
        return list(raw.items())
    try:
        return [(key, value) for key, value in raw]
    except (TypeError, ValueError) as exc:
        raise MalformedInputError("Share document must be a mapping or key/value pairs") from exc


def _parse_meta(meta: Any) -> ShareMeta:
    if isinstance(meta, ShareMeta):
        return meta
    try:
        return ShareMeta.model_validate(meta)
    except ValidationError as exc:
        raise MalformedInputError(f"Invalid share metadata: {exc}") from exc


def _parse_share(key: Any, entry: Any) -> Share:
    x = parse_identifier(key)
    try:
        record = ShareRecord.model_validate(entry)
    except ValidationError as exc:
        errors = exc.errors()
        if all(e["loc"][:1] == ("base",) and e["type"] != "missing" for e in errors):
            raise InvalidBaseError(entry.get("base")) from exc
        raise MalformedInputError(f"Invalid share entry {key!r}: {exc}") from exc
    share = Share(x=x, base=record.base, raw_value=record.value)
    # Decode now so digit errors surface during extraction.
    share.y  # noqa: B018
    return share


def extract(
    raw: RawDocument,
    meta: Optional[Any] = None,
    *,
    metadata_key: str = DEFAULT_METADATA_KEY,
) -> ReconstructionRequest:
    """
    Validate raw share entries and build a ReconstructionRequest.

    ``meta`` defaults to the entry stored under ``metadata_key``. A declared
    ``n`` that differs from the number of shares is reported as a
    ShareCountMismatch diagnostic on the request; extraction continues with
    the actual count.
    """
    pairs = _pairs(raw)
    if meta is None:
        found = [value for key, value in pairs if key == metadata_key]
        if not found:
            raise MalformedInputError(f"Share document has no '{metadata_key}' metadata entry")
        meta = found[-1]
    parsed_meta = _parse_meta(meta)
    if parsed_meta.k < 1:
        raise InvalidThresholdError(parsed_meta.k)

    shares: List[Share] = []
    seen = set()
    for key, entry in pairs:
        if key == metadata_key:
            continue
        share = _parse_share(key, entry)
        if share.x in seen:
            raise DuplicateIdentifierError(share.x)
        seen.add(share.x)
        shares.append(share)

    diagnostics = []
    if parsed_meta.n != len(shares):
        mismatch = ShareCountMismatch(declared=parsed_meta.n, actual=len(shares))
        logger.warning("%s; continuing with %d shares", mismatch.message, len(shares))
        diagnostics.append(mismatch)
    if parsed_meta.k > len(shares):
        raise InsufficientSharesError(parsed_meta.k, len(shares))

    shares.sort(key=lambda s: s.x)
    logger.debug("Extracted %d shares (k=%d)", len(shares), parsed_meta.k)
    return ReconstructionRequest(
        threshold=parsed_meta.k,
        shares=tuple(shares),
        diagnostics=tuple(diagnostics),
    )
