"""Metadata endpoints: static game definitions so clients hardcode nothing.

Enemy templates, upgrades and weapon specs are pydantic dataclasses defined
next to the engine code; they are serialized here directly through
TypeAdapters and stay the single source of truth.
"""

from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel, TypeAdapter

from survival.core.enemies import ENEMY_TYPES, EnemyTypeDefinition
from survival.core.enums import EffectKind, EnemyKind, GameState, PickupState, StatTarget, WeaponKind
from survival.core.upgrades import UPGRADE_CATALOG, UpgradeDefinition
from survival.weapons.registry import WEAPON_SPECS, WeaponSpec

router = APIRouter(prefix="/metadata", tags=["Metadata"])


class EnumEntry(BaseModel):
    id: int
    name: str


class EnumsResponse(BaseModel):
    enemy_kinds: list[EnumEntry]
    stat_targets: list[EnumEntry]
    weapon_kinds: list[EnumEntry]
    pickup_states: list[EnumEntry]
    effect_kinds: list[EnumEntry]
    game_states: list[EnumEntry]


_enemy_ta = TypeAdapter(EnemyTypeDefinition)
_upgrade_ta = TypeAdapter(UpgradeDefinition)
_weapon_ta = TypeAdapter(WeaponSpec)


def _entries(enum_cls) -> list[EnumEntry]:
    return [EnumEntry(id=int(m), name=m.name) for m in enum_cls]


@router.get("/enemies")
def get_enemies() -> dict:
    """Enemy templates keyed by kind."""
    return {"enemies": [_enemy_ta.dump_python(d, mode="json") for d in ENEMY_TYPES.values()]}


@router.get("/upgrades")
def get_upgrades() -> dict:
    return {"upgrades": [_upgrade_ta.dump_python(u, mode="json") for u in UPGRADE_CATALOG]}


@router.get("/weapons")
def get_weapons() -> dict:
    return {"weapons": [_weapon_ta.dump_python(s, mode="json") for s in WEAPON_SPECS.values()]}


@router.get("/enums", response_model=EnumsResponse)
def get_enums() -> EnumsResponse:
    return EnumsResponse(
        enemy_kinds=_entries(EnemyKind),
        stat_targets=_entries(StatTarget),
        weapon_kinds=_entries(WeaponKind),
        pickup_states=_entries(PickupState),
        effect_kinds=_entries(EffectKind),
        game_states=_entries(GameState),
    )
