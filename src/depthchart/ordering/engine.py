"""Order-renumbering rules that keep every position's depth dense.

Each operation takes a snapshot of all players and returns only the player
records that change. Within one position the ``order`` values always form
``1..n``; every mutation here preserves that as long as the input snapshot
already satisfies it.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from depthchart.config import is_known_position, normalize_position
from depthchart.models import Player

from .errors import InvalidRequestError, PlayerNotFoundError


logger = logging.getLogger(__name__)


def _index(snapshot: Iterable[Player]) -> Dict[str, Player]:
    return {player.id: player for player in snapshot}


def _require(players: Mapping[str, Player], player_id: str) -> Player:
    player = players.get(player_id)
    if player is None:
        raise PlayerNotFoundError(player_id)
    return player


def _position_count(players: Mapping[str, Player], position: str) -> int:
    return sum(1 for player in players.values() if player.position == position)


def _shift_range(
    players: Mapping[str, Player],
    position: str,
    *,
    start: int,
    stop: Optional[int],
    delta: int,
    skip_id: str,
) -> List[Player]:
    """Move every player of ``position`` with ``start <= order < stop`` by ``delta``.

    ``stop=None`` leaves the window open-ended. The player ``skip_id`` is never
    shifted since its new slot is assigned by the caller.
    """

    shifted: List[Player] = []
    for player in sorted(players.values(), key=lambda item: item.order):
        if player.id == skip_id or player.position != position:
            continue
        if player.order < start or (stop is not None and player.order >= stop):
            continue
        shifted.append(player.model_copy(update={"order": player.order + delta}))
    return shifted


def _reorder(players: Mapping[str, Player], target: Player, new_order: int) -> List[Player]:
    count = _position_count(players, target.position)
    if not 1 <= new_order <= count:
        raise InvalidRequestError(
            f"order {new_order} is outside 1..{count} for position {target.position}"
        )
    old_order = target.order
    if old_order == new_order:
        return []

    if old_order < new_order:
        shifted = _shift_range(
            players,
            target.position,
            start=old_order + 1,
            stop=new_order + 1,
            delta=-1,
            skip_id=target.id,
        )
    else:
        shifted = _shift_range(
            players,
            target.position,
            start=new_order,
            stop=old_order,
            delta=1,
            skip_id=target.id,
        )
    return [target.model_copy(update={"order": new_order}), *shifted]


def reorder_within_position(
    snapshot: Iterable[Player],
    player_id: str,
    new_order: int,
) -> List[Player]:
    """Move a player to ``new_order`` inside its current position."""

    players = _index(snapshot)
    target = _require(players, player_id)
    return _reorder(players, target, new_order)


def move_to_position(
    snapshot: Iterable[Player],
    player_id: str,
    new_position: str,
    new_order: int,
) -> List[Player]:
    """Place a player at ``new_order`` of ``new_position``.

    Moves that stay inside the player's current position are handled exactly
    like :func:`reorder_within_position`. For a real move, the destination
    accepts ``count + 1`` to append at the bottom.
    """

    players = _index(snapshot)
    target = _require(players, player_id)
    destination = normalize_position(new_position)

    if destination == target.position:
        return _reorder(players, target, new_order)

    if not is_known_position(destination):
        raise InvalidRequestError(f"Unknown position {new_position!r}")
    count = _position_count(players, destination)
    if not 1 <= new_order <= count + 1:
        raise InvalidRequestError(
            f"order {new_order} is outside 1..{count + 1} for position {destination}"
        )

    opened = _shift_range(
        players,
        destination,
        start=new_order,
        stop=None,
        delta=1,
        skip_id=target.id,
    )
    closed = _shift_range(
        players,
        target.position,
        start=target.order + 1,
        stop=None,
        delta=-1,
        skip_id=target.id,
    )
    moved = target.model_copy(update={"position": destination, "order": new_order})
    logger.debug(
        "Moving %s from %s#%d to %s#%d (%d opened, %d closed)",
        target.id,
        target.position,
        target.order,
        destination,
        new_order,
        len(opened),
        len(closed),
    )
    return [moved, *opened, *closed]


def swap(snapshot: Iterable[Player], player1_id: str, player2_id: str) -> List[Player]:
    """Exchange the full (position, order) slots of two players."""

    if player1_id == player2_id:
        raise InvalidRequestError("Cannot swap a player with itself")
    players = _index(snapshot)
    first = _require(players, player1_id)
    second = _require(players, player2_id)
    return [
        first.model_copy(update={"position": second.position, "order": second.order}),
        second.model_copy(update={"position": first.position, "order": first.order}),
    ]


def list_all(snapshot: Iterable[Player]) -> List[Player]:
    """Return every player sorted by position, then depth order."""

    return sorted(snapshot, key=lambda player: (player.position, player.order, player.id))


def apply_updates(snapshot: Iterable[Player], updates: Iterable[Player]) -> List[Player]:
    """Merge updated records into a snapshot by id; unknown ids are ignored."""

    players = _index(snapshot)
    for update in updates:
        if update.id in players:
            players[update.id] = update
    return list(players.values())


def group_by_position(snapshot: Iterable[Player]) -> Dict[str, List[Player]]:
    grouped: Dict[str, List[Player]] = defaultdict(list)
    for player in list_all(snapshot):
        grouped[player.position].append(player)
    return dict(grouped)


def find_density_violations(snapshot: Iterable[Player]) -> Dict[str, List[int]]:
    """Map each position whose orders are not exactly ``1..n`` to its orders."""

    violations: Dict[str, List[int]] = {}
    for position, members in group_by_position(snapshot).items():
        orders = [player.order for player in members]
        if orders != list(range(1, len(orders) + 1)):
            violations[position] = orders
    return violations


def normalize_orders(snapshot: Iterable[Player]) -> List[Player]:
    """Renumber every position to ``1..n`` keeping the existing relative order.

    Ties on ``order`` are broken by last name, first name, then id.
    """

    updates: List[Player] = []
    grouped: Dict[str, List[Player]] = defaultdict(list)
    for player in snapshot:
        grouped[player.position].append(player)
    for position in sorted(grouped):
        members: Sequence[Player] = sorted(
            grouped[position],
            key=lambda item: (item.order, item.last_name, item.first_name, item.id),
        )
        for slot, player in enumerate(members, start=1):
            if player.order != slot:
                updates.append(player.model_copy(update={"order": slot}))
    return updates
