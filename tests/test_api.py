import asyncio
import json
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from depthchart.api import create_app
from depthchart.config_loader import AppSettings
from depthchart.ordering import find_density_violations
from depthchart.persistence import PlayerStore


@pytest.fixture
async def client(store: PlayerStore, tmp_path: Path):
    settings = AppSettings(db_path=str(tmp_path / "depthchart.sqlite"))
    app = create_app(store=store, settings=settings)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        async_client.app = app
        yield async_client


def _slots(body: list[dict]) -> dict[str, tuple[str, int]]:
    return {item["id"]: (item["position"], item["order"]) for item in body}


async def _all_slots(client: AsyncClient) -> dict[str, tuple[str, int]]:
    resp = await client.get("/players")
    assert resp.status_code == 200
    return _slots(resp.json())


@pytest.mark.anyio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.anyio
async def test_list_players_sorted_with_camel_case_fields(client: AsyncClient):
    resp = await client.get("/players")
    assert resp.status_code == 200
    body = resp.json()
    assert [(item["position"], item["order"]) for item in body] == [
        ("K", 1),
        ("QB", 1),
        ("QB", 2),
        ("QB", 3),
        ("RB", 1),
        ("RB", 2),
    ]
    assert body[0]["firstName"] == "K"
    assert "first_name" not in body[0]


@pytest.mark.anyio
async def test_get_player_not_found(client: AsyncClient):
    resp = await client.get("/players/missing")
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_put_player_replaces_record(client: AsyncClient):
    payload = {
        "id": "a",
        "firstName": "Cole",
        "lastName": "Hart",
        "jersey": 4,
        "position": "QB",
        "order": 1,
        "status": "I",
    }
    resp = await client.put("/players/a", json=payload)
    assert resp.status_code == 200
    assert resp.json()["status"] == "I"

    fetched = await client.get("/players/a")
    assert fetched.json()["lastName"] == "Hart"


@pytest.mark.anyio
async def test_put_player_mismatched_id_is_bad_request(client: AsyncClient):
    payload = {"id": "b", "firstName": "X", "lastName": "Y", "jersey": 1, "position": "QB", "order": 1, "status": "A"}
    resp = await client.put("/players/a", json=payload)
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_put_player_missing_is_not_found(client: AsyncClient):
    payload = {"id": "zz", "firstName": "X", "lastName": "Y", "jersey": 1, "position": "QB", "order": 1, "status": "A"}
    resp = await client.put("/players/zz", json=payload)
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_reorder_applies_known_ids_and_skips_unknown(client: AsyncClient):
    resp = await client.post(
        "/players/reorder",
        json=[
            {"id": "c", "firstName": "C", "lastName": "Player", "jersey": 10, "position": "QB", "order": 1, "status": "A"},
            {"id": "a", "firstName": "A", "lastName": "Player", "jersey": 10, "position": "QB", "order": 2, "status": "A"},
            {"id": "b", "firstName": "B", "lastName": "Player", "jersey": 10, "position": "QB", "order": 3, "status": "A"},
            {"id": "ghost", "firstName": "G", "lastName": "Player", "jersey": 10, "position": "QB", "order": 4, "status": "A"},
        ],
    )
    assert resp.status_code == 200
    assert resp.json() == {"updated": ["c", "a", "b"], "skipped": ["ghost"]}

    slots = await _all_slots(client)
    assert slots["c"] == ("QB", 1)
    assert slots["a"] == ("QB", 2)
    assert slots["b"] == ("QB", 3)


@pytest.mark.anyio
async def test_strict_reorder_rejects_batch_with_unknown_id(client: AsyncClient):
    before = await _all_slots(client)
    resp = await client.post(
        "/players/reorder?strict=true",
        json=[
            {"id": "a", "firstName": "A", "lastName": "Player", "jersey": 10, "position": "QB", "order": 3, "status": "A"},
            {"id": "ghost", "firstName": "G", "lastName": "Player", "jersey": 10, "position": "QB", "order": 1, "status": "A"},
        ],
    )
    assert resp.status_code == 404
    assert await _all_slots(client) == before


@pytest.mark.anyio
async def test_swap_exchanges_slots_across_positions(client: AsyncClient):
    resp = await client.post("/players/swap", json={"player1Id": "a", "player2Id": "d"})
    assert resp.status_code == 200
    body = resp.json()
    assert (body["player1"]["id"], body["player1"]["position"], body["player1"]["order"]) == ("a", "RB", 1)
    assert (body["player2"]["id"], body["player2"]["position"], body["player2"]["order"]) == ("d", "QB", 1)

    slots = await _all_slots(client)
    assert slots["b"] == ("QB", 2)
    assert slots["e"] == ("RB", 2)


@pytest.mark.anyio
async def test_swap_errors(client: AsyncClient):
    same = await client.post("/players/swap", json={"player1Id": "a", "player2Id": "a"})
    assert same.status_code == 400

    missing = await client.post("/players/swap", json={"player1Id": "a", "player2Id": "ghost"})
    assert missing.status_code == 404


@pytest.mark.anyio
async def test_move_between_positions(client: AsyncClient):
    resp = await client.post("/players/a/move", json={"position": "RB", "order": 2})
    assert resp.status_code == 200
    body = resp.json()
    assert (body["player"]["position"], body["player"]["order"]) == ("RB", 2)

    slots = await _all_slots(client)
    assert slots["a"] == ("RB", 2)
    assert slots["d"] == ("RB", 1)
    assert slots["e"] == ("RB", 3)
    assert slots["b"] == ("QB", 1)
    assert slots["c"] == ("QB", 2)
    store = client.app.state.player_store
    assert find_density_violations(store.list_players()) == {}


@pytest.mark.anyio
async def test_move_within_position_reorders(client: AsyncClient):
    resp = await client.post("/players/c/move", json={"position": "QB", "order": 1})
    assert resp.status_code == 200
    assert len(resp.json()["updated"]) == 3

    slots = await _all_slots(client)
    assert (slots["a"], slots["b"], slots["c"]) == (("QB", 2), ("QB", 3), ("QB", 1))


@pytest.mark.anyio
async def test_move_to_current_slot_is_noop(client: AsyncClient):
    resp = await client.post("/players/b/move", json={"position": "QB", "order": 2})
    assert resp.status_code == 200
    assert resp.json()["updated"] == []
    assert resp.json()["player"]["id"] == "b"


@pytest.mark.anyio
async def test_move_errors(client: AsyncClient):
    missing = await client.post("/players/ghost/move", json={"position": "QB", "order": 1})
    assert missing.status_code == 404

    out_of_range = await client.post("/players/a/move", json={"position": "RB", "order": 9})
    assert out_of_range.status_code == 400

    unknown = await client.post("/players/a/move", json={"position": "ROVER", "order": 1})
    assert unknown.status_code == 400

    invalid = await client.post("/players/a/move", json={"position": "RB", "order": 0})
    assert invalid.status_code == 422


@pytest.mark.anyio
async def test_depth_chart_groups_by_phase(client: AsyncClient):
    resp = await client.get("/depth-chart")
    assert resp.status_code == 200
    body = resp.json()
    assert [phase["phase"] for phase in body["phases"]] == ["offense", "defense", "special-teams"]

    offense = body["phases"][0]
    quarterbacks = offense["groups"][0]
    assert quarterbacks["name"] == "Quarterbacks"
    qb = quarterbacks["positions"][0]
    assert qb["code"] == "QB"
    assert qb["displayName"] == "QB"
    assert [player["id"] for player in qb["players"]] == ["a", "b", "c"]

    kicker = body["phases"][2]["groups"][0]["positions"][0]
    assert (kicker["code"], kicker["displayName"]) == ("K", "PK")
    assert body["unassigned"] == []


@pytest.mark.anyio
async def test_depth_chart_phase_filter(client: AsyncClient):
    resp = await client.get("/depth-chart", params={"phase": "defense"})
    assert resp.status_code == 200
    assert [phase["phase"] for phase in resp.json()["phases"]] == ["defense"]

    bad = await client.get("/depth-chart", params={"phase": "kickoff"})
    assert bad.status_code == 400


@pytest.mark.anyio
async def test_statuses(client: AsyncClient):
    resp = await client.get("/statuses")
    assert resp.status_code == 200
    assert [item["label"] for item in resp.json()] == ["A", "PS", "IR"]
    assert resp.json()[1]["fullLabel"] == "Practice Squad"


@pytest.mark.anyio
async def test_concurrent_moves_keep_orders_dense(client: AsyncClient):
    targets = ["a", "b", "c", "d", "e", "k"] * 4
    positions = ["QB", "RB", "K", "TE"]

    responses = await asyncio.gather(
        *(
            client.post(f"/players/{player_id}/move", json={"position": positions[index % len(positions)], "order": 1})
            for index, player_id in enumerate(targets)
        )
    )

    assert {resp.status_code for resp in responses} == {200}
    store = client.app.state.player_store
    assert store.count() == 6
    assert find_density_violations(store.list_players()) == {}


def test_create_app_seeds_empty_store(tmp_path: Path):
    seed = tmp_path / "players.json"
    seed.write_text(
        json.dumps(
            [
                {"Id": "1", "FirstName": "Cole", "LastName": "Hart", "Jersey": 4, "Position": "QB", "Order": 2, "Status": "A"},
                {"Id": "2", "FirstName": "Max", "LastName": "Reed", "Jersey": 7, "Position": "QB", "Order": 4, "Status": "A"},
            ]
        ),
        encoding="utf-8",
    )
    settings = AppSettings(db_path=str(tmp_path / "app.sqlite"), seed_path=str(seed))

    app = create_app(settings=settings)

    store = app.state.player_store
    assert [(player.id, player.order) for player in store.list_players()] == [("1", 1), ("2", 2)]


def test_create_app_leaves_populated_store_alone(store: PlayerStore, tmp_path: Path):
    seed = tmp_path / "players.json"
    seed.write_text(json.dumps([{"id": "x", "position": "QB", "order": 1}]), encoding="utf-8")

    create_app(store=store, settings=AppSettings(seed_path=str(seed)))

    assert store.get_player("x") is None
