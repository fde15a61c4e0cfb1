from httpx import AsyncClient

from frostline.models.user import User


async def _create_tomato(client: AsyncClient, user_id: int) -> dict:
    res = await client.post(
        f"/api/v1/users/{user_id}/plants",
        json={
            "name": "Tomato",
            "sowing_method": "indoor_start",
            "seed_start": {"magnitude": 6},
            "transplant": {"magnitude": 1, "direction": "after"},
        },
    )
    assert res.status_code == 201, res.text
    return res.json()


async def test_default_frost_date(client: AsyncClient, owner: User):
    res = await client.get(f"/api/v1/users/{owner.id}/settings/frost-date")
    assert res.status_code == 200
    assert res.json() == {"frost_date": "2026-05-15", "is_default": True}


async def test_update_frost_date_moves_plant_tasks(client: AsyncClient, owner: User):
    plant = await _create_tomato(client, owner.id)
    base = f"/api/v1/users/{owner.id}"

    res = await client.put(f"{base}/settings/frost-date", json={"frost_date": "2026-04-20"})
    assert res.status_code == 200
    assert res.json() == {
        "frost_date": "2026-04-20",
        "regenerated_plant_ids": [plant["id"]],
        "failed_plant_ids": [],
    }

    res = await client.get(f"{base}/settings/frost-date")
    assert res.json() == {"frost_date": "2026-04-20", "is_default": False}

    tasks = (await client.get(f"{base}/plants/{plant['id']}/tasks")).json()
    assert [t["due_date"] for t in tasks] == ["2026-03-09", "2026-04-27"]


async def test_update_frost_date_keeps_general_tasks(client: AsyncClient, owner: User):
    base = f"/api/v1/users/{owner.id}"
    task = (await client.post(f"{base}/tasks", json={"due_date": "2026-06-01", "notes": "Mulch"})).json()
    await client.post(f"{base}/tasks/{task['id']}/complete")

    await client.put(f"{base}/settings/frost-date", json={"frost_date": "2026-04-20"})

    res = await client.get(f"{base}/tasks", params={"start": "2026-06-01", "end": "2026-06-01"})
    assert [(t["id"], t["status"]) for t in res.json()] == [(task["id"], "done")]


async def test_invalid_frost_date(client: AsyncClient, owner: User):
    base = f"/api/v1/users/{owner.id}/settings/frost-date"

    res = await client.put(base, json={"frost_date": "May 1st"})
    assert res.status_code == 422
    assert res.json()["detail"] == "Invalid date format"

    res = await client.get(base)
    assert res.json() == {"frost_date": "2026-05-15", "is_default": True}


async def test_frost_date_per_owner(client: AsyncClient, owner: User, other_owner: User):
    await client.put(f"/api/v1/users/{owner.id}/settings/frost-date", json={"frost_date": "2026-04-01"})

    res = await client.get(f"/api/v1/users/{other_owner.id}/settings/frost-date")
    assert res.json()["is_default"] is True


async def test_frost_date_unknown_owner(client: AsyncClient):
    res = await client.get("/api/v1/users/9999/settings/frost-date")
    assert res.status_code == 404
