"""Dataclasses describing one deployment attempt and its outcome."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Optional, Union


class ArtifactKind(str, Enum):
    APP = "app"
    DRIVER = "driver"

    @property
    def url_segment(self) -> str:
        return "app" if self is ArtifactKind.APP else "device"

    @property
    def lookup_endpoint(self) -> str:
        return "userAppTypes" if self is ArtifactKind.APP else "userDeviceTypes"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["ArtifactKind"]:
        """Map user input (``app``, ``driver`` or ``device``) to a kind."""
        text = (value or "").strip().lower()
        if text == "app":
            return cls.APP
        if text in ("driver", "device"):
            return cls.DRIVER
        return None


@dataclass(frozen=True)
class ExtractedMetadata:
    name: Optional[str] = None
    namespace: Optional[str] = None
    hub_ip: Optional[str] = None
    declared_kind: Optional[ArtifactKind] = None
    declared_id: Optional[str] = None


@dataclass(frozen=True)
class DeploymentRequest:
    source_text: str
    hub_address: str
    kind: ArtifactKind
    remote_id: Optional[str] = None
    name: Optional[str] = None
    namespace: Optional[str] = None

    def with_remote_id(self, remote_id: str) -> "DeploymentRequest":
        return replace(self, remote_id=remote_id)


@dataclass(frozen=True)
class RemoteArtifactDescriptor:
    id: int
    name: str
    namespace: str

    def matches(self, name: Optional[str], namespace: Optional[str]) -> bool:
        return self.name == name and self.namespace == namespace


@dataclass(frozen=True)
class HttpResult:
    """Raw hub reply; ``status`` is -1 when the call never completed."""

    status: int
    body: Optional[str] = None

    @property
    def transport_failed(self) -> bool:
        return self.status == -1


@dataclass(frozen=True)
class Success:
    success = True
    message: str = "Success!"


@dataclass(frozen=True)
class Failure:
    http_status: int
    message: str
    success = False


@dataclass(frozen=True)
class TransportError:
    message: str
    success = False


DeploymentOutcome = Union[Success, Failure, TransportError]


@dataclass(frozen=True)
class AwaitingInput:
    """Resolution could not finish; the caller must supply the missing values."""

    hub_address: Optional[str] = None
    kind: Optional[ArtifactKind] = None
    success = False

    @property
    def message(self) -> str:
        missing = []
        if not self.hub_address:
            missing.append("hub address")
        if self.kind is None:
            missing.append("app/driver type")
        return f"Missing {' and '.join(missing)}"


@dataclass
class DeployContext:
    """Choices remembered between attempts; owned by the front-end."""

    hub_address: Optional[str] = None
    path_kinds: Dict[str, ArtifactKind] = field(default_factory=dict)

    def kind_for_path(self, file_path: Optional[str]) -> Optional[ArtifactKind]:
        if not file_path:
            return None
        return self.path_kinds.get(file_path)

    def remember(
        self,
        file_path: Optional[str],
        hub_address: Optional[str] = None,
        kind: Optional[ArtifactKind] = None,
    ) -> None:
        if hub_address:
            self.hub_address = hub_address
        if file_path and kind is not None:
            self.path_kinds[file_path] = kind
