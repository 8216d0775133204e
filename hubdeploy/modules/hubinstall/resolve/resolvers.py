"""Pure resolvers that settle the artifact kind and the target hub.

Nothing here touches the network, the filesystem or the user: every answer is
derived from the extracted metadata, the file path and the ``DeployContext``
the front-end passes in.
"""

from __future__ import annotations

import logging
import re
from pathlib import PurePath
from typing import Callable, Optional, Sequence

from hubdeploy.modules.hubinstall.domain import ArtifactKind, DeployContext, ExtractedMetadata

log = logging.getLogger(__name__)

KindResolver = Callable[[ExtractedMetadata, Optional[str], DeployContext], Optional[ArtifactKind]]

_IPV4_OCTET = r"(25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)"
_IPV4 = re.compile(rf"^{_IPV4_OCTET}\.{_IPV4_OCTET}\.{_IPV4_OCTET}\.{_IPV4_OCTET}$")
_HOSTNAME = re.compile(r"^[A-Za-z0-9][A-Za-z0-9-]{0,62}(\.[A-Za-z0-9][A-Za-z0-9-]{0,62})*$")


def kind_from_declaration(
    extracted: ExtractedMetadata, file_path: Optional[str], context: DeployContext
) -> Optional[ArtifactKind]:
    return extracted.declared_kind


def kind_from_file_name(
    extracted: ExtractedMetadata, file_path: Optional[str], context: DeployContext
) -> Optional[ArtifactKind]:
    file_name = PurePath(file_path).name.lower() if file_path else ""
    if "app" in file_name:
        return ArtifactKind.APP
    if "driver" in file_name:
        return ArtifactKind.DRIVER
    return None


def kind_from_context(
    extracted: ExtractedMetadata, file_path: Optional[str], context: DeployContext
) -> Optional[ArtifactKind]:
    return context.kind_for_path(file_path)


def answered_kind_resolver(kind: ArtifactKind) -> KindResolver:
    """Answer with the kind the user picked for this attempt."""

    def kind_from_answer(
        extracted: ExtractedMetadata, file_path: Optional[str], context: DeployContext
    ) -> Optional[ArtifactKind]:
        return kind

    return kind_from_answer


def make_source_keyword_resolver(source_text: str) -> KindResolver:
    """Guess from keywords: drivers declare capabilities inside ``metadata``."""

    lowered = (source_text or "").lower()

    def kind_from_source_keywords(
        extracted: ExtractedMetadata, file_path: Optional[str], context: DeployContext
    ) -> Optional[ArtifactKind]:
        if any(word in lowered for word in ("capability", "metadata")):
            return ArtifactKind.DRIVER
        if any(word in lowered for word in ("definition", "section", "page")):
            return ArtifactKind.APP
        return None

    return kind_from_source_keywords


DEFAULT_KIND_RESOLVERS: Sequence[KindResolver] = (
    kind_from_declaration,
    kind_from_file_name,
    kind_from_context,
)


def resolve_kind(
    extracted: ExtractedMetadata,
    file_path: Optional[str],
    context: DeployContext,
    resolvers: Sequence[KindResolver] = DEFAULT_KIND_RESOLVERS,
) -> Optional[ArtifactKind]:
    for resolver in resolvers:
        kind = resolver(extracted, file_path, context)
        if kind is not None:
            log.debug("resolve_kind: %s -> %s (%s)", file_path or "-", kind.value, resolver.__name__)
            return kind
    log.debug("resolve_kind: %s unresolved", file_path or "-")
    return None


def resolve_hub_address(extracted: ExtractedMetadata, context: DeployContext) -> Optional[str]:
    if extracted.hub_ip:
        return extracted.hub_ip
    return context.hub_address or None


def is_valid_hub_address(address: Optional[str]) -> bool:
    if not address:
        return False
    candidate = re.sub(r"^https?://", "", address.strip()).rstrip("/")
    host, _, port = candidate.partition(":")
    if port and not (port.isdigit() and 0 < int(port) < 65536):
        return False
    if re.fullmatch(r"[0-9.]+", host):
        return bool(_IPV4.match(host))
    return bool(_HOSTNAME.match(host))


def hub_base_url(address: str) -> str:
    """Ensure the address carries a scheme and no trailing slash."""
    url = address.strip()
    if not url.startswith(("http://", "https://")):
        url = "http://" + url
    return url.rstrip("/")
