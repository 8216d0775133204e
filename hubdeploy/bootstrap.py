"""Service wiring shared by the API and the CLI."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from hubdeploy.modules.hubinstall import HubInstallService
from hubdeploy.modules.hubinstall.repositories import DeployContextStore
from .settings import Settings

log = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Container that wires plain-Python services with shared settings."""

    settings: Settings
    context_store: Optional[DeployContextStore] = None
    hubinstall_service: HubInstallService = field(init=False)

    def __post_init__(self) -> None:
        if self.context_store is None:
            self.context_store = DeployContextStore.from_settings(self.settings)
        self.hubinstall_service = HubInstallService(self.settings, store=self.context_store)
        log.info(
            "Hub install service ready context=%s timeouts=%ss/%ss",
            self.context_store.path,
            self.settings.connect_timeout,
            self.settings.read_timeout,
        )
