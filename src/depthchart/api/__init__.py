"""REST API for the depth chart service."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Iterable, List

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from depthchart.api.schemas import (
    DepthChartResponse,
    MoveRequest,
    MoveResponse,
    PhaseResponse,
    PositionDepthResponse,
    PositionGroupResponse,
    ReorderResponse,
    StatusLabelResponse,
    SwapRequest,
    SwapResponse,
)
from depthchart.config import PHASES, display_name, is_known_position, iter_groups, unique_status_labels
from depthchart.config_loader import AppSettings
from depthchart.ingest import load_seed_file, seed_store
from depthchart.models import Player
from depthchart.ordering import (
    InvalidRequestError,
    PlayerNotFoundError,
    group_by_position,
    list_all,
    move_to_position,
    swap,
)
from depthchart.persistence import PlayerStore


logger = logging.getLogger("uvicorn.error")


def build_depth_chart(players: Iterable[Player], phase: str | None = None) -> DepthChartResponse:
    """Group players phase -> position group -> position for display."""

    by_position = group_by_position(players)
    phases: List[PhaseResponse] = []
    for phase_name in PHASES:
        if phase is not None and phase_name != phase:
            continue
        groups = [
            PositionGroupResponse(
                name=group.name,
                positions=[
                    PositionDepthResponse(
                        code=code,
                        display_name=display_name(code),
                        players=by_position.get(code, []),
                    )
                    for code in group.positions
                ],
            )
            for group in iter_groups(phase_name)
        ]
        phases.append(PhaseResponse(phase=phase_name, groups=groups))
    unassigned: List[Player] = []
    if phase is None:
        for code, members in by_position.items():
            if not is_known_position(code):
                unassigned.extend(members)
    return DepthChartResponse(phases=phases, unassigned=unassigned)


def _seed_if_empty(store: PlayerStore, settings: AppSettings) -> None:
    if not settings.seed_path or store.count() > 0:
        return
    seed_path = Path(settings.seed_path)
    players = load_seed_file(seed_path)
    seed_store(store, players)
    logger.info("Seeded empty player store from %s", seed_path)


def create_app(store: PlayerStore | None = None, settings: AppSettings | None = None) -> FastAPI:
    settings = settings or AppSettings.from_env()
    store = store or PlayerStore(settings.db_path)
    _seed_if_empty(store, settings)

    app = FastAPI(title="depthchart")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.player_store = store
    app.state.settings = settings
    write_lock = threading.Lock()

    def _fetch_player_or_404(player_id: str) -> Player:
        player = store.get_player(player_id)
        if player is None:
            raise HTTPException(status_code=404, detail="Player not found")
        return player

    def _run_operation(operation, *args) -> List[Player]:
        try:
            return operation(store.list_players(), *args)
        except PlayerNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except InvalidRequestError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/players", response_model=List[Player])
    async def list_players():
        return list_all(store.list_players())

    @app.get("/players/{player_id}", response_model=Player)
    async def get_player(player_id: str):
        return _fetch_player_or_404(player_id)

    @app.put("/players/{player_id}", response_model=Player)
    def update_player(player_id: str, player: Player):
        if player.id != player_id:
            raise HTTPException(status_code=400, detail="Player id in path and body differ")
        with write_lock:
            try:
                return store.replace_player(player)
            except KeyError as exc:
                raise HTTPException(status_code=404, detail="Player not found") from exc

    @app.post("/players/reorder", response_model=ReorderResponse)
    def reorder_players(players: List[Player], strict: bool = Query(False)):
        with write_lock:
            missing = store.missing_ids(player.id for player in players)
            if missing and strict:
                raise HTTPException(
                    status_code=404,
                    detail=f"Unknown player ids: {', '.join(missing)}",
                )
            applied = store.apply_updates(players)
        if missing:
            logger.info("Reorder skipped %d unknown player ids", len(missing))
        return ReorderResponse(updated=applied, skipped=missing)

    @app.post("/players/swap", response_model=SwapResponse)
    def swap_players(request: SwapRequest):
        with write_lock:
            first, second = _run_operation(swap, request.player1_id, request.player2_id)
            store.apply_updates([first, second])
        logger.info(
            "Swapped %s to %s#%d and %s to %s#%d",
            first.id,
            first.position,
            first.order,
            second.id,
            second.position,
            second.order,
        )
        return SwapResponse(player1=first, player2=second)

    @app.post("/players/{player_id}/move", response_model=MoveResponse)
    def move_player(player_id: str, request: MoveRequest):
        with write_lock:
            updates = _run_operation(move_to_position, player_id, request.position, request.order)
            store.apply_updates(updates)
        moved = updates[0] if updates else _fetch_player_or_404(player_id)
        return MoveResponse(player=moved, updated=updates)

    @app.get("/depth-chart", response_model=DepthChartResponse)
    async def depth_chart(phase: str | None = Query(None)):
        if phase is not None and phase not in PHASES:
            raise HTTPException(status_code=400, detail=f"Unknown phase {phase!r}")
        return build_depth_chart(store.list_players(), phase)

    @app.get("/statuses", response_model=List[StatusLabelResponse])
    async def statuses():
        return [
            StatusLabelResponse(code=item.code, label=item.label, full_label=item.full_label)
            for item in unique_status_labels()
        ]

    return app
