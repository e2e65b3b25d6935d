"""Player input: movement intent and dash trigger."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from survival.api.dependencies import get_engine_manager
from survival.api.engine_manager import EngineManager
from survival.api.schemas import ControlResponse, DashInputRequest, MoveInputRequest

router = APIRouter(prefix="/input")


def _tick(manager: EngineManager) -> int:
    snapshot = manager.get_snapshot()
    return snapshot.tick if snapshot else 0


@router.post("/move", response_model=ControlResponse)
def set_move(
    body: MoveInputRequest,
    manager: EngineManager = Depends(get_engine_manager),
) -> ControlResponse:
    manager.set_move(body.x, body.y)
    return ControlResponse(status="ok", message=f"Move intent ({body.x:.2f}, {body.y:.2f}).",
                           tick=_tick(manager))


@router.post("/dash", response_model=ControlResponse)
def dash(
    body: DashInputRequest | None = None,
    manager: EngineManager = Depends(get_engine_manager),
) -> ControlResponse:
    body = body or DashInputRequest()
    manager.request_dash(body.x, body.y)
    return ControlResponse(status="ok", message="Dash requested.", tick=_tick(manager))
