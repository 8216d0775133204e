"""Pull ``key: value`` deployment hints out of app/driver source text.

Recognised forms::

    // hub: 192.168.0.200
    // type: device
    // id: 1711
    definition(name: "File Manager Device", namespace: "jpage4500", author: "Joe Page") {

Each key is an independent linear scan of the same text, so there is no
shared parse state between calls.
"""

from __future__ import annotations

import logging
from typing import Optional

from hubdeploy.modules.hubinstall.domain import ArtifactKind, ExtractedMetadata
from hubdeploy.modules.hubinstall.domain.constants import (
    MAX_METADATA_VALUE_LENGTH,
    METADATA_KEY_HUB,
    METADATA_KEY_ID,
    METADATA_KEY_NAME,
    METADATA_KEY_NAMESPACE,
    METADATA_KEY_TYPE,
)

log = logging.getLogger(__name__)

_SKIPPED = frozenset("\"'")
_TERMINATORS = frozenset("\n,)")


def extract_value(text: str, key: str) -> Optional[str]:
    """Return the trimmed value following the first ``key:`` or ``None``.

    Quotes are dropped wherever they appear; a newline, comma or closing
    parenthesis ends the value. Values longer than 256 characters and values
    that run into the end of the text are reported as absent.
    """
    index = text.find(key + ":")
    if index < 0:
        return None
    buffer = []
    for char in text[index + len(key) + 1:]:
        if char in _SKIPPED:
            continue
        if char in _TERMINATORS:
            value = "".join(buffer).strip()
            log.debug('extract_value: %s = "%s"', key, value)
            return value
        buffer.append(char)
        if len(buffer) > MAX_METADATA_VALUE_LENGTH:
            log.error("extract_value: %s exceeded max length", key)
            return None
    # unterminated value at end of text is discarded for compatibility
    log.debug('extract_value: %s unterminated = "%s"', key, "".join(buffer).strip())
    return None


def extract_metadata(text: str) -> ExtractedMetadata:
    declared_type = extract_value(text, METADATA_KEY_TYPE)
    declared_kind = None
    if declared_type is not None:
        lowered = declared_type.lower()
        if lowered == "app":
            declared_kind = ArtifactKind.APP
        elif lowered == "device":
            declared_kind = ArtifactKind.DRIVER
    return ExtractedMetadata(
        name=extract_value(text, METADATA_KEY_NAME) or None,
        namespace=extract_value(text, METADATA_KEY_NAMESPACE) or None,
        hub_ip=extract_value(text, METADATA_KEY_HUB) or None,
        declared_kind=declared_kind,
        declared_id=extract_value(text, METADATA_KEY_ID) or None,
    )


def looks_like_artifact(text: str) -> bool:
    """Apps and drivers both carry a ``definition(...)`` block."""
    return "definition" in (text or "").lower()
