from .context_store import DeployContextStore

__all__ = ["DeployContextStore"]
