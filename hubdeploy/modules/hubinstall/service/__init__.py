from .classifier import classify
from .manager import DeployReport, HubInstallService, InvalidDeployInput
from .orchestrator import DeploymentOrchestrator, StatusCallback

__all__ = [
    "DeployReport",
    "DeploymentOrchestrator",
    "HubInstallService",
    "InvalidDeployInput",
    "StatusCallback",
    "classify",
]
