"""Front-end facing service: validation, context persistence, one deploy attempt."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union

from hubdeploy.modules.hubinstall.domain import (
    ArtifactKind,
    AwaitingInput,
    DeployContext,
    DeploymentOutcome,
    Failure,
    Success,
    TransportError,
)
from hubdeploy.modules.hubinstall.metadata import looks_like_artifact
from hubdeploy.modules.hubinstall.repositories import DeployContextStore
from hubdeploy.modules.hubinstall.resolve import is_valid_hub_address
from hubdeploy.settings import Settings
from .orchestrator import DeploymentOrchestrator, StatusCallback

log = logging.getLogger(__name__)

OrchestratorFactory = Callable[[Settings], DeploymentOrchestrator]


class InvalidDeployInput(ValueError):
    """Raised before any network call when the caller's input is unusable."""


@dataclass
class DeployReport:
    outcome: Union[DeploymentOutcome, AwaitingInput]
    progress: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return isinstance(self.outcome, Success)

    @property
    def status(self) -> str:
        if isinstance(self.outcome, Success):
            return "success"
        if isinstance(self.outcome, TransportError):
            return "transport_error"
        if isinstance(self.outcome, AwaitingInput):
            return "awaiting_input"
        return "failure"

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "status": self.status,
            "message": self.outcome.message,
            "progress": list(self.progress),
        }
        if isinstance(self.outcome, Failure):
            payload["http_status"] = self.outcome.http_status
        if isinstance(self.outcome, AwaitingInput):
            payload["hub_address"] = self.outcome.hub_address
            payload["kind"] = self.outcome.kind.value if self.outcome.kind else None
        return payload


class HubInstallService:
    """Runs one deployment per call with a fresh orchestrator (and cookie jar)."""

    def __init__(
        self,
        settings: Settings,
        store: Optional[DeployContextStore] = None,
        orchestrator_factory: Optional[OrchestratorFactory] = None,
    ) -> None:
        self.settings = settings
        self.store = store or DeployContextStore.from_settings(settings)
        self._orchestrator_factory = orchestrator_factory or DeploymentOrchestrator

    def current_context(self) -> DeployContext:
        return self.store.load()

    def deploy(
        self,
        *,
        source: str,
        file_path: Optional[str] = None,
        hub_address: Optional[str] = None,
        kind: Optional[ArtifactKind] = None,
        status_callback: StatusCallback = None,
    ) -> DeployReport:
        """Deploy ``source``; ``hub_address``/``kind`` are answers supplied by the user.

        Answers are final for this attempt and are also remembered in the
        persisted context for later attempts.
        """
        if not looks_like_artifact(source):
            raise InvalidDeployInput(
                "This does not appear to be an app or device driver (missing definition)."
            )
        hub_address = (hub_address or "").strip() or None
        if hub_address and not is_valid_hub_address(hub_address):
            raise InvalidDeployInput(f"Invalid hub address: {hub_address}")

        context = self.store.load()
        if hub_address or kind is not None:
            context.remember(file_path, hub_address=hub_address, kind=kind)
            self.store.save(context)

        report = DeployReport(outcome=AwaitingInput())

        def _collect(message: str) -> None:
            report.progress.append(message)
            if status_callback:
                status_callback(message)

        with self._orchestrator_factory(self.settings) as orchestrator:
            report.outcome = orchestrator.deploy(
                source,
                file_path,
                context,
                answered_kind=kind,
                answered_hub_address=hub_address,
                status_callback=_collect,
            )
        log.info("Deploy %s finished status=%s", file_path or "-", report.status)
        return report
