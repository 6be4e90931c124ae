"""HTTP routes for the army book API."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field

from armybook.api.runtime import ApiState
from armybook.domain import costs, loader, profile, query
from armybook.domain.errors import NotFound, SelectionError, ValidationError
from armybook.domain.models import Document, Unit, Weapon

logger = logging.getLogger(__name__)

router = APIRouter()


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]


class FactionSummary(BaseModel):
    slug: str
    faction: str
    game: str
    unit_count: int


class UnitSummaryRead(BaseModel):
    name: str
    type: str
    base_cost: int
    quality: int
    defense: int
    option_count: int


class OptionRead(BaseModel):
    group: str
    name: str
    cost: int
    mount: str | None


class SelectionRequest(BaseModel):
    selection: dict[str, list[str]] = Field(default_factory=dict)


class CostLineRead(BaseModel):
    group: str
    option: str
    cost: int


class CostRead(BaseModel):
    unit: str
    base_cost: int
    lines: list[CostLineRead]
    total: int


class WeaponRead(BaseModel):
    name: str
    range: int | str
    attacks: int
    armor_piercing: int
    special_rules: list[str]


class ProfileRead(BaseModel):
    unit: str
    type: str
    quality: int
    defense: int
    special_rules: list[str]
    weapons: list[WeaponRead]
    mounted: bool
    mount_name: str | None
    options: list[str]
    cost: int


def _document(state: ApiState, slug: str) -> Document:
    try:
        return state.catalog.get(slug)
    except NotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail=[
                {"path": violation.path, "rule": violation.rule, "message": violation.message}
                for violation in exc.violations
            ],
        ) from exc


def _unit(state: ApiState, slug: str, name: str) -> Unit:
    document = _document(state, slug)
    try:
        return query.find_unit(document, name)
    except NotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


def _weapon_read(weapon: Weapon) -> WeaponRead:
    return WeaponRead(
        name=weapon.name,
        range="-" if weapon.range is None else weapon.range,
        attacks=weapon.attacks,
        armor_piercing=weapon.armor_piercing,
        special_rules=list(weapon.special_rules),
    )


@router.get("/health")
async def health(state: ApiStateDep) -> dict[str, object]:
    return {"status": "ok", "factions": len(state.catalog.slugs())}


@router.get("/factions", response_model=list[FactionSummary])
async def list_factions(state: ApiStateDep) -> list[FactionSummary]:
    summaries: list[FactionSummary] = []
    for slug in state.catalog.slugs():
        try:
            document = state.catalog.get(slug)
        except ValidationError as exc:
            logger.warning(
                "skipping invalid faction %s: %s", slug, "; ".join(map(str, exc.violations))
            )
            continue
        summaries.append(
            FactionSummary(
                slug=slug,
                faction=document.faction,
                game=document.game,
                unit_count=len(document.units),
            )
        )
    return summaries


@router.get("/factions/{slug}/units", response_model=list[UnitSummaryRead])
async def list_units(slug: str, state: ApiStateDep) -> list[UnitSummaryRead]:
    document = _document(state, slug)
    return [
        UnitSummaryRead(
            name=summary.name,
            type=summary.type,
            base_cost=summary.base_cost,
            quality=summary.quality,
            defense=summary.defense,
            option_count=summary.option_count,
        )
        for summary in query.list_units(document)
    ]


@router.get("/factions/{slug}/units/{name}")
async def get_unit(slug: str, name: str, state: ApiStateDep) -> dict[str, object]:
    return loader.dump_unit(_unit(state, slug, name))


@router.get("/factions/{slug}/units/{name}/options", response_model=list[OptionRead])
async def list_options(slug: str, name: str, state: ApiStateDep) -> list[OptionRead]:
    unit = _unit(state, slug, name)
    return [
        OptionRead(group=ref.group, name=ref.name, cost=ref.cost, mount=ref.mount)
        for ref in query.list_options(unit)
    ]


@router.post("/factions/{slug}/units/{name}/cost", response_model=CostRead)
async def unit_cost(
    slug: str, name: str, request: SelectionRequest, state: ApiStateDep
) -> CostRead:
    unit = _unit(state, slug, name)
    try:
        breakdown = costs.cost_breakdown(unit, request.selection)
    except SelectionError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return CostRead(
        unit=breakdown.unit,
        base_cost=breakdown.base_cost,
        lines=[
            CostLineRead(group=line.group, option=line.option, cost=line.cost)
            for line in breakdown.lines
        ],
        total=breakdown.total,
    )


@router.post("/factions/{slug}/units/{name}/profile", response_model=ProfileRead)
async def unit_profile(
    slug: str, name: str, request: SelectionRequest, state: ApiStateDep
) -> ProfileRead:
    unit = _unit(state, slug, name)
    try:
        resolved = profile.resolve(unit, request.selection)
    except SelectionError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return ProfileRead(
        unit=resolved.unit,
        type=resolved.type,
        quality=resolved.quality,
        defense=resolved.defense,
        special_rules=list(resolved.special_rules),
        weapons=[_weapon_read(weapon) for weapon in resolved.weapons],
        mounted=resolved.mounted,
        mount_name=resolved.mount_name,
        options=list(resolved.options),
        cost=resolved.cost,
    )
