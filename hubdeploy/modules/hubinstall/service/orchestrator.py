"""Drive one deployment attempt: lookup, install or update, classify."""

from __future__ import annotations

import json
import logging
from typing import Callable, Dict, List, Optional, Sequence, Union

from hubdeploy.modules.hubinstall.domain import (
    ArtifactKind,
    AwaitingInput,
    DeployContext,
    DeploymentOutcome,
    DeploymentRequest,
    Failure,
    HttpResult,
    RemoteArtifactDescriptor,
    Success,
    TransportError,
)
from hubdeploy.modules.hubinstall.domain.constants import (
    CREATE_PATH,
    INSTALL_CONTENT_TYPE,
    INSTALL_PATH,
    LOOKUP_PATH,
    UNKNOWN_ERROR,
    UPDATE_CONTENT_TYPE,
    UPDATE_PATH,
)
from hubdeploy.modules.hubinstall.metadata import extract_metadata
from hubdeploy.modules.hubinstall.resolve import (
    DEFAULT_KIND_RESOLVERS,
    KindResolver,
    answered_kind_resolver,
    hub_base_url,
    make_source_keyword_resolver,
    resolve_hub_address,
    resolve_kind,
)
from hubdeploy.modules.hubinstall.transport import HubHttpClient
from hubdeploy.settings import Settings
from .classifier import classify

StatusCallback = Optional[Callable[[str], None]]
LookupResult = Union[RemoteArtifactDescriptor, Failure, TransportError, None]


class DeploymentOrchestrator:
    """Sequences the blocking hub calls for a single artifact.

    Resolution (pure) always completes before the first network call. When the
    hub address or the kind is still unknown, ``deploy`` returns
    ``AwaitingInput`` without touching the network and the caller is expected
    to ask the user, record the answer in the ``DeployContext`` and call again.
    """

    def __init__(
        self,
        settings: Settings,
        http_client: Optional[HubHttpClient] = None,
        kind_resolvers: Optional[Sequence[KindResolver]] = None,
    ) -> None:
        self.settings = settings
        self.http = http_client or HubHttpClient(settings)
        self.kind_resolvers = tuple(kind_resolvers or DEFAULT_KIND_RESOLVERS)
        self.log = logging.getLogger(self.__class__.__name__)

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "DeploymentOrchestrator":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------ resolution
    def prepare(
        self,
        source_text: str,
        file_path: Optional[str],
        context: DeployContext,
        answered_kind: Optional[ArtifactKind] = None,
        answered_hub_address: Optional[str] = None,
    ) -> Union[DeploymentRequest, AwaitingInput]:
        """Resolve kind and hub without touching the network.

        Answers the user gave for this attempt are final: they win over the
        in-source tokens, the filename and the remembered context.
        """
        extracted = extract_metadata(source_text)
        resolvers: List[KindResolver] = []
        if answered_kind is not None:
            resolvers.append(answered_kind_resolver(answered_kind))
        resolvers.extend(self.kind_resolvers)
        if self.settings.guess_kind_from_source:
            resolvers.append(make_source_keyword_resolver(source_text))
        kind = resolve_kind(extracted, file_path, context, resolvers)
        hub_address = answered_hub_address or resolve_hub_address(extracted, context)
        if not hub_address or kind is None:
            return AwaitingInput(hub_address=hub_address, kind=kind)
        return DeploymentRequest(
            source_text=source_text,
            hub_address=hub_address,
            kind=kind,
            remote_id=extracted.declared_id,
            name=extracted.name,
            namespace=extracted.namespace,
        )

    def deploy(
        self,
        source_text: str,
        file_path: Optional[str],
        context: DeployContext,
        *,
        answered_kind: Optional[ArtifactKind] = None,
        answered_hub_address: Optional[str] = None,
        status_callback: StatusCallback = None,
    ) -> Union[DeploymentOutcome, AwaitingInput]:
        prepared = self.prepare(source_text, file_path, context, answered_kind, answered_hub_address)
        if isinstance(prepared, AwaitingInput):
            self.log.info("Deploy of %s awaiting input: %s", file_path or "-", prepared.message)
            return prepared
        return self.deploy_request(prepared, status_callback=status_callback)

    # ------------------------------------------------------------------ network phase
    def deploy_request(
        self,
        request: DeploymentRequest,
        *,
        status_callback: StatusCallback = None,
    ) -> DeploymentOutcome:
        label = request.kind.label
        name = request.name or "unnamed"
        if request.remote_id:
            self._notify(status_callback, f"Updating {label} on hub...")
            return self._report(self._update(request), status_callback)

        self._notify(status_callback, f'Looking up {label} ID for "{name}"...')
        found = self._lookup(request)
        if isinstance(found, (Failure, TransportError)):
            return self._report(found, status_callback)
        if found is not None:
            self._notify(status_callback, f"Found {label} ID: {found.id}")
            request = request.with_remote_id(str(found.id))
            self._notify(status_callback, f"Updating {label} on hub...")
            return self._report(self._update(request), status_callback)

        self._notify(status_callback, f'"{name}" not found')
        self._notify(status_callback, f"Installing {label} on hub...")
        return self._report(self._install(request), status_callback)

    def _lookup(self, request: DeploymentRequest) -> LookupResult:
        # http://192.168.0.200/hub2/userAppTypes
        url = self._url(request, LOOKUP_PATH.format(endpoint=request.kind.lookup_endpoint))
        result = self.http.get(url, self._headers(request))
        if result.transport_failed:
            return TransportError(result.body or UNKNOWN_ERROR)
        if result.status != 200:
            return Failure(result.status, result.body or UNKNOWN_ERROR)
        descriptors = self._parse_descriptors(result)
        if descriptors is None:
            return Failure(result.status, UNKNOWN_ERROR)
        for descriptor in descriptors:
            if descriptor.matches(request.name, request.namespace):
                self.log.info("lookup: FOUND id=%s name=%s namespace=%s", descriptor.id, descriptor.name, descriptor.namespace)
                return descriptor
        self.log.warning(
            "lookup: NOT_FOUND results=%s kind=%s name=%s namespace=%s",
            len(descriptors),
            request.kind.value,
            request.name,
            request.namespace,
        )
        return None

    def _update(self, request: DeploymentRequest) -> DeploymentOutcome:
        # POST /device/ideUpdate?id=885
        path = UPDATE_PATH.format(segment=request.kind.url_segment, remote_id=request.remote_id)
        headers = self._headers(request, **{"Content-Type": UPDATE_CONTENT_TYPE})
        return classify(self.http.post(self._url(request, path), request.source_text, headers))

    def _install(self, request: DeploymentRequest) -> DeploymentOutcome:
        segment = request.kind.url_segment
        create_url = self._url(request, CREATE_PATH.format(segment=segment))
        created = self.http.get(create_url, self._headers(request))
        if created.transport_failed:
            return TransportError(created.body or UNKNOWN_ERROR)
        headers = self._headers(
            request,
            **{"Content-Type": INSTALL_CONTENT_TYPE, "Accept": "*/*", "Referer": create_url},
        )
        payload = json.dumps({"source": request.source_text})
        return classify(self.http.post(self._url(request, INSTALL_PATH.format(segment=segment)), payload, headers))

    # ------------------------------------------------------------------ helpers
    def _parse_descriptors(self, result: HttpResult) -> Optional[List[RemoteArtifactDescriptor]]:
        try:
            data = json.loads(result.body or "")
        except ValueError:
            self.log.error("lookup: response is not JSON")
            return None
        if not isinstance(data, list):
            self.log.error("lookup: expected a JSON array, got %s", type(data).__name__)
            return None
        descriptors: List[RemoteArtifactDescriptor] = []
        for entry in data:
            if not isinstance(entry, dict):
                continue
            try:
                descriptors.append(
                    RemoteArtifactDescriptor(
                        id=int(entry["id"]),
                        name=str(entry.get("name") or ""),
                        namespace=str(entry.get("namespace") or ""),
                    )
                )
            except (KeyError, TypeError, ValueError):
                self.log.debug("lookup: skipping malformed entry %s", entry)
        return descriptors

    def _url(self, request: DeploymentRequest, path: str) -> str:
        return hub_base_url(request.hub_address) + path

    def _headers(self, request: DeploymentRequest, **extra: str) -> Dict[str, str]:
        headers = {
            "Origin": hub_base_url(request.hub_address),
            "User-Agent": self.settings.user_agent,
            "Accept-Encoding": "gzip,deflate",
        }
        headers.update(extra)
        return headers

    def _report(self, outcome: DeploymentOutcome, status_callback: StatusCallback) -> DeploymentOutcome:
        if isinstance(outcome, Success):
            self._notify(status_callback, outcome.message)
        elif isinstance(outcome, TransportError):
            self._notify(status_callback, f"Error connecting to hub: {outcome.message}")
        elif outcome.http_status != 200:
            self._notify(status_callback, f"Error response from hub: {outcome.http_status}: {outcome.message}")
        else:
            self._notify(status_callback, f"Error: {outcome.message}")
        return outcome

    def _notify(self, status_callback: StatusCallback, message: str) -> None:
        self.log.info(message)
        if status_callback:
            status_callback(message)
