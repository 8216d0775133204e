from .models import (
    ArtifactKind,
    AwaitingInput,
    DeployContext,
    DeploymentOutcome,
    DeploymentRequest,
    ExtractedMetadata,
    Failure,
    HttpResult,
    RemoteArtifactDescriptor,
    Success,
    TransportError,
)

__all__ = [
    "ArtifactKind",
    "AwaitingInput",
    "DeployContext",
    "DeploymentOutcome",
    "DeploymentRequest",
    "ExtractedMetadata",
    "Failure",
    "HttpResult",
    "RemoteArtifactDescriptor",
    "Success",
    "TransportError",
]
