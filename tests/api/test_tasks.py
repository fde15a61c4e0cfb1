from datetime import date, timedelta

from httpx import AsyncClient

from frostline.core.config import settings
from frostline.models.user import User


async def _create_task(client: AsyncClient, user_id: int, **fields) -> dict:
    payload = {"due_date": "2026-06-01", "notes": "Turn the compost"}
    payload.update(fields)
    res = await client.post(f"/api/v1/users/{user_id}/tasks", json=payload)
    assert res.status_code == 201, res.text
    return res.json()


async def test_create_general_task(client: AsyncClient, owner: User):
    task = await _create_task(client, owner.id)
    assert task["task_type"] == "garden_task"
    assert task["status"] == "pending"
    assert task["plant_id"] is None
    assert task["display_subject"] == "Garden task"
    assert task["notes"] == "Turn the compost"


async def test_create_task_ignores_submitted_status(client: AsyncClient, owner: User):
    task = await _create_task(client, owner.id, status="done")
    assert task["status"] == "pending"


async def test_create_task_end_before_due(client: AsyncClient, owner: User):
    res = await client.post(
        f"/api/v1/users/{owner.id}/tasks",
        json={"due_date": "2026-06-10", "end_date": "2026-06-01"},
    )
    assert res.status_code == 422


async def test_create_task_for_other_owners_plant(client: AsyncClient, owner: User, other_owner: User):
    res = await client.post(
        f"/api/v1/users/{other_owner.id}/plants",
        json={"name": "Pea", "sowing_method": "direct_sow", "seed_start": {"magnitude": 4}},
    )
    plant_id = res.json()["id"]

    res = await client.post(
        f"/api/v1/users/{owner.id}/tasks", json={"due_date": "2026-06-01", "plant_id": plant_id}
    )
    assert res.status_code == 404
    assert res.json()["detail"] == "Plant not found"


async def test_complete_skip_and_reset(client: AsyncClient, owner: User):
    task = await _create_task(client, owner.id)
    base = f"/api/v1/users/{owner.id}/tasks/{task['id']}"

    res = await client.post(f"{base}/complete")
    assert res.status_code == 200
    assert res.json()["status"] == "done"

    res = await client.post(f"{base}/skip")
    assert res.status_code == 409

    res = await client.post(f"{base}/reset")
    assert res.json()["status"] == "pending"

    res = await client.post(f"{base}/skip")
    assert res.json()["status"] == "skipped"


async def test_transition_unknown_task(client: AsyncClient, owner: User):
    res = await client.post(f"/api/v1/users/{owner.id}/tasks/9999/complete")
    assert res.status_code == 404
    assert res.json()["detail"] == "Task not found"


async def test_update_task(client: AsyncClient, owner: User):
    task = await _create_task(client, owner.id)
    url = f"/api/v1/users/{owner.id}/tasks/{task['id']}"

    res = await client.patch(url, json={"notes": "Turn and water the compost", "end_date": "2026-06-03"})
    assert res.status_code == 200
    data = res.json()
    assert data["notes"] == "Turn and water the compost"
    assert data["end_date"] == "2026-06-03"
    assert data["due_date"] == "2026-06-01"

    res = await client.patch(url, json={"due_date": "2026-06-05"})
    assert res.status_code == 422

    res = await client.patch(url, json={"due_date": None, "end_date": None})
    assert res.status_code == 200
    assert res.json()["due_date"] == "2026-06-01"
    assert res.json()["end_date"] is None


async def test_delete_task(client: AsyncClient, owner: User):
    task = await _create_task(client, owner.id)
    url = f"/api/v1/users/{owner.id}/tasks/{task['id']}"

    assert (await client.delete(url)).status_code == 204
    assert (await client.post(f"{url}/complete")).status_code == 404


async def test_other_owner_cannot_touch_task(client: AsyncClient, owner: User, other_owner: User):
    task = await _create_task(client, owner.id)
    url = f"/api/v1/users/{other_owner.id}/tasks/{task['id']}"

    assert (await client.patch(url, json={"notes": "x"})).status_code == 404
    assert (await client.delete(url)).status_code == 404
    assert (await client.post(f"{url}/complete")).status_code == 404


async def test_list_tasks_in_range(client: AsyncClient, owner: User):
    await _create_task(client, owner.id, due_date="2026-03-01", notes="early")
    await _create_task(client, owner.id, due_date="2026-06-15", notes="late")
    await _create_task(client, owner.id, due_date="2026-06-01", notes="middle")

    res = await client.get(
        f"/api/v1/users/{owner.id}/tasks", params={"start": "2026-05-01", "end": "2026-06-30"}
    )
    assert res.status_code == 200
    assert [t["notes"] for t in res.json()] == ["middle", "late"]


async def test_list_tasks_default_window(client: AsyncClient, owner: User):
    today = date.today()
    stale = today - timedelta(days=settings.TASK_HISTORY_DAYS + 1)
    recent = today - timedelta(days=settings.TASK_HISTORY_DAYS)
    await _create_task(client, owner.id, due_date=stale.isoformat(), notes="stale")
    await _create_task(client, owner.id, due_date=recent.isoformat(), notes="recent")
    await _create_task(client, owner.id, due_date=(today + timedelta(days=30)).isoformat(), notes="upcoming")

    res = await client.get(f"/api/v1/users/{owner.id}/tasks")
    assert [t["notes"] for t in res.json()] == ["recent", "upcoming"]


async def test_list_tasks_bad_range(client: AsyncClient, owner: User):
    res = await client.get(
        f"/api/v1/users/{owner.id}/tasks", params={"start": "2026-06-01", "end": "2026-05-01"}
    )
    assert res.status_code == 422


async def test_list_tasks_unknown_owner(client: AsyncClient):
    res = await client.get("/api/v1/users/9999/tasks")
    assert res.status_code == 404
