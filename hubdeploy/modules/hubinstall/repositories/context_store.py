"""JSON file persistence for the remembered hub address and file kinds."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from hubdeploy.modules.hubinstall.domain import ArtifactKind, DeployContext
from hubdeploy.settings import Settings

log = logging.getLogger(__name__)


class DeployContextStore:
    """Load/save a ``DeployContext``; only the front-ends use this."""

    def __init__(self, path: Path, default_hub_address: Optional[str] = None) -> None:
        self.path = Path(path).expanduser()
        self.default_hub_address = default_hub_address

    @classmethod
    def from_settings(cls, settings: Settings) -> "DeployContextStore":
        return cls(Path(settings.context_file), default_hub_address=settings.default_hub_address)

    def load(self) -> DeployContext:
        context = DeployContext(hub_address=self.default_hub_address)
        if not self.path.exists():
            return context
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            log.warning("Ignoring unreadable deploy context %s: %s", self.path, exc)
            return context
        if not isinstance(data, dict):
            log.warning("Ignoring deploy context %s: expected an object", self.path)
            return context
        if data.get("hub_address"):
            context.hub_address = str(data["hub_address"])
        for file_path, value in (data.get("path_kinds") or {}).items():
            kind = ArtifactKind.parse(value)
            if kind is not None:
                context.path_kinds[file_path] = kind
        return context

    def save(self, context: DeployContext) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self.to_payload(context), indent=2), encoding="utf-8")
        log.debug("Saved deploy context to %s", self.path)

    @staticmethod
    def to_payload(context: DeployContext) -> Dict[str, Any]:
        return {
            "hub_address": context.hub_address,
            "path_kinds": {path: kind.value for path, kind in sorted(context.path_kinds.items())},
        }
