"""Hub install module exports."""

from .service import HubInstallService
from .controller import router as hubinstall_router

__all__ = ["HubInstallService", "hubinstall_router"]
