"""FastAPI routes for deploying app/driver source to a hub."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field

from hubdeploy.modules.hubinstall.domain import ArtifactKind
from hubdeploy.modules.hubinstall.repositories import DeployContextStore
from hubdeploy.modules.hubinstall.service import HubInstallService, InvalidDeployInput

router = APIRouter(prefix="/hubinstall", tags=["hub-install"])


class DeployPayload(BaseModel):
    source: str = Field(..., description="App or driver source text")
    file_path: Optional[str] = Field(None, description="Editor path, used for kind hints and caching")
    hub_address: Optional[str] = Field(None, description="Hub address chosen by the user")
    kind: Optional[str] = Field(None, description="'app' or 'driver' chosen by the user")


def get_service(request: Request) -> HubInstallService:
    container = getattr(request.app.state, "container", None)
    if not container or not getattr(container, "hubinstall_service", None):
        raise HTTPException(status_code=500, detail="Hub install service not initialized.")
    return container.hubinstall_service


# plain ``def``: FastAPI runs it in the worker threadpool, off the event loop
@router.post("/deploy")
def deploy(payload: DeployPayload, svc: HubInstallService = Depends(get_service)) -> Dict[str, Any]:
    kind = None
    if payload.kind:
        kind = ArtifactKind.parse(payload.kind)
        if kind is None:
            raise HTTPException(status_code=400, detail="kind must be 'app' or 'driver'")
    try:
        report = svc.deploy(
            source=payload.source,
            file_path=payload.file_path,
            hub_address=payload.hub_address,
            kind=kind,
        )
    except InvalidDeployInput as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return report.as_dict()


@router.get("/context")
def get_context(svc: HubInstallService = Depends(get_service)) -> Dict[str, Any]:
    return DeployContextStore.to_payload(svc.current_context())
