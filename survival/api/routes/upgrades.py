"""Upgrade menu: inspect the pending choices, pick one or dismiss."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from survival.api.dependencies import get_engine_manager
from survival.api.engine_manager import EngineManager
from survival.api.schemas import UpgradeAppliedResponse, UpgradeChoiceSchema, UpgradeMenuResponse
from survival.core.upgrades import UpgradeDefinition

router = APIRouter(prefix="/upgrades")


def choice_schema(index: int, u: UpgradeDefinition) -> UpgradeChoiceSchema:
    return UpgradeChoiceSchema(
        index=index,
        upgrade_id=u.upgrade_id,
        display_text=u.display_text,
        description=u.description,
        stat_target=u.stat_target.name.lower(),
        magnitude=u.magnitude,
    )


def _current_tick(manager: EngineManager) -> int:
    snapshot = manager.get_snapshot()
    return snapshot.tick if snapshot else 0


@router.get("", response_model=UpgradeMenuResponse)
def get_upgrade_menu(
    manager: EngineManager = Depends(get_engine_manager),
) -> UpgradeMenuResponse:
    snapshot = manager.get_snapshot()
    if snapshot is None or snapshot.upgrade_menu_level is None:
        return UpgradeMenuResponse(open=False)
    return UpgradeMenuResponse(
        open=True,
        level=snapshot.upgrade_menu_level,
        choices=[choice_schema(i, u) for i, u in enumerate(snapshot.upgrade_choices)],
    )


@router.post("/choose/{index}", response_model=UpgradeAppliedResponse)
def choose_upgrade(
    index: int,
    manager: EngineManager = Depends(get_engine_manager),
) -> UpgradeAppliedResponse:
    snapshot = manager.get_snapshot()
    if snapshot is None or snapshot.upgrade_menu_level is None:
        raise HTTPException(status_code=409, detail="No upgrade menu is open.")
    try:
        applied = manager.choose_upgrade(index)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return UpgradeAppliedResponse(
        status="ok", applied=choice_schema(index, applied), tick=_current_tick(manager),
    )


@router.post("/dismiss", response_model=UpgradeAppliedResponse)
def dismiss_upgrade(
    manager: EngineManager = Depends(get_engine_manager),
) -> UpgradeAppliedResponse:
    try:
        manager.dismiss_upgrade()
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return UpgradeAppliedResponse(status="ok", tick=_current_tick(manager))
