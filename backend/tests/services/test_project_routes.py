"""Project routes: listing, owner-only mutation, tags and reviews.

Invariants:
    - Anonymous callers get 401 on mutations; non-owners get 403
    - Listings are paginated three per page and ordered by votes
    - Tag trouble never fails project creation
"""

from uuid import uuid4

from sqlalchemy import func, select

from app.core.errors import TagPersistenceError
from app.models.tag import Tag

PROJECTS = "/api/v1/projects"


async def _create(client, who, title="Portfolio", tags="", description="A website"):
    res = await client.post(PROJECTS, headers=who["headers"], json={
        "title": title, "description": description, "tags": tags,
    })
    assert res.status_code == 201, res.text
    return res.json()


async def test_empty_listing(client):
    res = await client.get(PROJECTS)
    assert res.status_code == 200
    body = res.json()
    assert body["projects"] == []
    assert body["pagination"]["total_pages"] == 0
    assert body["search_query"] == ""


async def test_page_past_end_of_empty_listing_is_first_page(client):
    res = await client.get(PROJECTS, params={"page": 5})
    assert res.status_code == 200
    body = res.json()
    assert body["projects"] == []
    assert body["pagination"]["current_page"] == 1
    assert body["pagination"]["has_previous"] is False


async def test_create_requires_token(client):
    res = await client.post(PROJECTS, json={"title": "t", "description": "d"})
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "AUTHENTICATION_REQUIRED"


async def test_create_rejects_garbage_token(client):
    res = await client.post(
        PROJECTS,
        headers={"Authorization": "Bearer not-a-token"},
        json={"title": "t", "description": "d"},
    )
    assert res.status_code == 401


async def test_create_attaches_tags_and_flashes(client, ada):
    body = await _create(client, ada, tags="Python, Django, Python")

    assert body["flash"] == {"level": "success", "message": "Project was added successfully!"}
    project = body["project"]
    assert [t["name"] for t in project["tags"]] == ["Django", "Python"]
    assert project["owner"]["id"] == ada["profile_id"]
    assert project["featured_image"] == "default.jpg"
    assert body["tags"] == {"attached": ["Python", "Django"], "failed": []}


async def test_get_project_and_missing_project(client, ada):
    created = (await _create(client, ada))["project"]

    res = await client.get(f"{PROJECTS}/{created['id']}")
    assert res.status_code == 200
    assert res.json()["title"] == "Portfolio"
    assert res.json()["reviews"] == []

    res = await client.get(f"{PROJECTS}/{uuid4()}")
    assert res.status_code == 404


async def test_owner_update_replaces_tags(client, ada):
    created = (await _create(client, ada, tags="a, b"))["project"]

    res = await client.put(f"{PROJECTS}/{created['id']}", headers=ada["headers"], json={
        "title": "Renamed", "description": "Still a website", "tags": "b, c",
    })

    assert res.status_code == 200
    body = res.json()
    assert body["flash"]["message"] == "Project was updated successfully!"
    assert body["project"]["title"] == "Renamed"
    assert [t["name"] for t in body["project"]["tags"]] == ["b", "c"]


async def test_update_without_tags_keeps_existing_tags(client, ada):
    created = (await _create(client, ada, tags="a, b"))["project"]

    res = await client.put(f"{PROJECTS}/{created['id']}", headers=ada["headers"], json={
        "title": "Renamed", "description": "Still a website",
    })
    assert res.status_code == 200
    body = res.json()
    assert [t["name"] for t in body["project"]["tags"]] == ["a", "b"]
    assert body["tags"] == {"attached": [], "failed": []}


async def test_update_with_empty_tags_clears_them(client, ada):
    created = (await _create(client, ada, tags="a, b"))["project"]

    res = await client.put(f"{PROJECTS}/{created['id']}", headers=ada["headers"], json={
        "title": "Renamed", "description": "Still a website", "tags": "",
    })
    assert res.status_code == 200
    assert res.json()["project"]["tags"] == []


async def test_non_owner_cannot_update_or_delete(client, ada, bob):
    created = (await _create(client, ada))["project"]
    url = f"{PROJECTS}/{created['id']}"

    res = await client.put(url, headers=bob["headers"], json={
        "title": "Hijacked", "description": "nope",
    })
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "PERMISSION_DENIED"

    res = await client.delete(url, headers=bob["headers"])
    assert res.status_code == 403

    res = await client.get(url)
    assert res.json()["title"] == "Portfolio"


async def test_delete_keeps_tag_rows(client, ada, test_db):
    created = (await _create(client, ada, tags="keep-me"))["project"]

    res = await client.delete(f"{PROJECTS}/{created['id']}", headers=ada["headers"])
    assert res.status_code == 200
    assert res.json()["flash"]["message"] == "Project deleted successfully!"

    assert (await client.get(f"{PROJECTS}/{created['id']}")).status_code == 404
    count = await test_db.execute(select(func.count()).select_from(Tag))
    assert count.scalar_one() == 1


async def test_listing_paginates_three_per_page(client, ada):
    for i in range(4):
        await _create(client, ada, title=f"Project {i}")

    first = (await client.get(PROJECTS)).json()
    assert len(first["projects"]) == 3
    assert first["pagination"]["total_pages"] == 2
    assert first["pagination"]["has_next"] is True

    second = (await client.get(PROJECTS, params={"page": 2})).json()
    assert len(second["projects"]) == 1

    clamped = (await client.get(PROJECTS, params={"page": 99})).json()
    assert clamped["pagination"]["current_page"] == 2
    assert len(clamped["projects"]) == 1


async def test_search_matches_title_or_description(client, ada):
    await _create(client, ada, title="Weather app", description="Forecasts")
    await _create(client, ada, title="Blog", description="Thoughts about WEATHER")
    await _create(client, ada, title="Shop", description="Sells things")

    res = await client.get(PROJECTS, params={"search_query": "weather"})
    body = res.json()
    assert {p["title"] for p in body["projects"]} == {"Weather app", "Blog"}
    assert body["search_query"] == "weather"


async def test_review_updates_votes_and_ordering(client, ada, bob, register_user):
    liked = (await _create(client, ada, title="Liked"))["project"]
    disliked = (await _create(client, ada, title="Disliked"))["project"]
    carol = await register_user("carol")

    res = await client.post(
        f"{PROJECTS}/{liked['id']}/reviews", headers=bob["headers"],
        json={"value": "up", "body": "Nice"},
    )
    assert res.status_code == 201
    project = res.json()["project"]
    assert project["vote_total"] == 1
    assert project["vote_ratio"] == 100
    assert project["reviews"][0]["owner"]["id"] == bob["profile_id"]

    await client.post(
        f"{PROJECTS}/{liked['id']}/reviews", headers=carol["headers"],
        json={"value": "down"},
    )
    await client.post(
        f"{PROJECTS}/{disliked['id']}/reviews", headers=bob["headers"],
        json={"value": "down"},
    )

    liked_now = (await client.get(f"{PROJECTS}/{liked['id']}")).json()
    assert liked_now["vote_total"] == 2
    assert liked_now["vote_ratio"] == 50

    titles = [p["title"] for p in (await client.get(PROJECTS)).json()["projects"]]
    assert titles == ["Liked", "Disliked"]


async def test_owner_cannot_review_own_project(client, ada):
    created = (await _create(client, ada))["project"]
    res = await client.post(
        f"{PROJECTS}/{created['id']}/reviews", headers=ada["headers"],
        json={"value": "up"},
    )
    assert res.status_code == 400


async def test_second_review_is_a_conflict(client, ada, bob):
    created = (await _create(client, ada))["project"]
    url = f"{PROJECTS}/{created['id']}/reviews"

    assert (await client.post(url, headers=bob["headers"], json={"value": "up"})).status_code == 201
    res = await client.post(url, headers=bob["headers"], json={"value": "down"})
    assert res.status_code == 409


async def test_tag_store_outage_does_not_fail_creation(client, ada, monkeypatch):
    async def unreachable(repo, project_id, tags, mode):
        raise TagPersistenceError("connection refused", completed=[])

    monkeypatch.setattr("app.services.project_service.reconcile_tags", unreachable)

    body = await _create(client, ada, tags="python, sql")

    assert body["project"]["tags"] == []
    assert body["tags"] == {"attached": [], "failed": ["python", "sql"]}
