"""Users Routes — HTTP contract: paths, status codes and envelopes.

Invariants tested:
    - Success envelope: status/message/success plus data when there is a payload
    - Failure envelope: status/message/success=false plus error.code
    - Input errors → 400, duplicates/edge conflicts → 409, missing users → 404
"""

from datetime import datetime, timezone
from uuid import uuid4

from followgraph.api.responses import UserMessages


async def _create(client, username):
    res = await client.post("/api/v1/users/create", json={"username": username})
    assert res.status_code == 201, res.text
    return res.json()["data"]


# ─── create ──────────────────────────────────────────────────────

async def test_create_user_returns_201_envelope(client):
    res = await client.post("/api/v1/users/create", json={"username": "alice"})
    assert res.status_code == 201
    body = res.json()
    assert body["status"] == 201
    assert body["success"] is True
    assert body["message"] == UserMessages.CREATED
    assert body["data"]["username"] == "alice"
    assert body["data"]["followers"] == []
    assert body["data"]["followings"] == []
    assert "createdAt" in body["data"]


async def test_create_user_short_username_400(client):
    res = await client.post("/api/v1/users/create", json={"username": "ab"})
    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert body["error"]["code"] == "INVALID_USERNAME"


async def test_create_user_duplicate_409(client):
    await _create(client, "alice")
    res = await client.post("/api/v1/users/create", json={"username": "alice"})
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "DUPLICATE_USERNAME"


async def test_create_user_missing_body_field_400(client):
    res = await client.post("/api/v1/users/create", json={})
    assert res.status_code == 400
    body = res.json()
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert body["error"]["details"]


# ─── follow / unfollow ───────────────────────────────────────────

async def test_follow_success_has_no_data(client):
    alice = await _create(client, "alice")
    bob = await _create(client, "bob")

    res = await client.post(
        "/api/v1/users/follow",
        json={"userId": alice["id"], "followId": bob["id"]},
    )

    assert res.status_code == 200
    body = res.json()
    assert body == {
        "status": 200, "message": UserMessages.FOLLOWED, "success": True,
    }


async def test_follow_twice_409(client):
    alice = await _create(client, "alice")
    bob = await _create(client, "bob")
    payload = {"userId": alice["id"], "followId": bob["id"]}
    await client.post("/api/v1/users/follow", json=payload)

    res = await client.post("/api/v1/users/follow", json=payload)

    assert res.status_code == 409
    assert res.json()["error"]["code"] == "FOLLOWING_UPDATE_FAILED"


async def test_follow_invalid_id_400(client):
    res = await client.post(
        "/api/v1/users/follow", json={"userId": "123", "followId": str(uuid4())},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_IDENTIFIER"


async def test_follow_missing_ids_400(client):
    res = await client.post("/api/v1/users/follow", json={})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_IDENTIFIER"


async def test_follow_same_ids_400(client):
    uid = str(uuid4())
    res = await client.post(
        "/api/v1/users/follow", json={"userId": uid, "followId": uid},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "IDENTITY_CONFLICT"


async def test_follow_unknown_followee_404(client):
    alice = await _create(client, "alice")
    res = await client.post(
        "/api/v1/users/follow",
        json={"userId": alice["id"], "followId": str(uuid4())},
    )
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "FOLLOWERS_UPDATE_FAILED"


async def test_unfollow_round_trip(client):
    alice = await _create(client, "alice")
    bob = await _create(client, "bob")
    await client.post(
        "/api/v1/users/follow",
        json={"userId": alice["id"], "followId": bob["id"]},
    )

    res = await client.post(
        "/api/v1/users/unfollow",
        json={"userId": alice["id"], "unfollowId": bob["id"]},
    )

    assert res.status_code == 200
    assert res.json()["message"] == UserMessages.UNFOLLOWED
    listing = (await client.get("/api/v1/users/all")).json()["data"]
    for user in listing:
        assert user["followersDetails"] == []
        assert user["followingsDetails"] == []


async def test_unfollow_not_following_409(client):
    alice = await _create(client, "alice")
    bob = await _create(client, "bob")
    res = await client.post(
        "/api/v1/users/unfollow",
        json={"userId": alice["id"], "unfollowId": bob["id"]},
    )
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "UNFOLLOWING_UPDATE_FAILED"


# ─── queries ─────────────────────────────────────────────────────

async def test_all_users_enriched(client):
    alice = await _create(client, "alice")
    bob = await _create(client, "bob")
    await client.post(
        "/api/v1/users/follow",
        json={"userId": alice["id"], "followId": bob["id"]},
    )

    res = await client.get("/api/v1/users/all")

    assert res.status_code == 200
    body = res.json()
    assert body["message"] == UserMessages.ALL_USERS
    users = {u["username"]: u for u in body["data"]}
    assert users["bob"]["followersDetails"] == [
        {"id": alice["id"], "username": "alice"},
    ]
    assert users["alice"]["followingsDetails"] == [
        {"id": bob["id"], "username": "bob"},
    ]


async def test_all_users_empty_list_still_has_data(client):
    res = await client.get("/api/v1/users/all")
    assert res.status_code == 200
    assert res.json()["data"] == []


async def test_daily_followers(client):
    alice = await _create(client, "alice")
    bob = await _create(client, "bob")
    await client.post(
        "/api/v1/users/follow",
        json={"userId": alice["id"], "followId": bob["id"]},
    )

    res = await client.get(f"/api/v1/users/{bob['id']}/followers/daily")

    assert res.status_code == 200
    today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
    assert res.json()["data"] == [{"date": today, "count": 1}]


async def test_daily_followers_invalid_id_400(client):
    res = await client.get("/api/v1/users/not-an-id/followers/daily")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_IDENTIFIER"


async def test_mutual_followers(client):
    a = await _create(client, "a_user")
    b = await _create(client, "b_user")
    x = await _create(client, "x_user")
    for target in (a, b):
        await client.post(
            "/api/v1/users/follow",
            json={"userId": x["id"], "followId": target["id"]},
        )

    res = await client.get(f"/api/v1/users/mutual-followers/{a['id']}/{b['id']}")

    assert res.status_code == 200
    assert res.json()["data"] == [{"id": x["id"], "username": "x_user"}]


async def test_mutual_followers_none_is_empty_list(client):
    a = await _create(client, "a_user")
    b = await _create(client, "b_user")
    res = await client.get(f"/api/v1/users/mutual-followers/{a['id']}/{b['id']}")
    assert res.status_code == 200
    assert res.json()["data"] == []


async def test_mutual_followers_unknown_user_404(client):
    a = await _create(client, "a_user")
    res = await client.get(
        f"/api/v1/users/mutual-followers/{a['id']}/{uuid4()}",
    )
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_mutual_followers_same_user_400(client):
    uid = str(uuid4())
    res = await client.get(f"/api/v1/users/mutual-followers/{uid}/{uid}")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "IDENTITY_CONFLICT"


# ─── repair & fallbacks ──────────────────────────────────────────

async def test_repair_edges_drops_half_edge_to_missing_user(client):
    alice = await _create(client, "alice")
    await client.post(
        "/api/v1/users/follow",
        json={"userId": alice["id"], "followId": str(uuid4())},
    )

    dry = await client.post("/api/v1/users/repair-edges?dryRun=true")
    assert dry.status_code == 200
    assert dry.json()["data"]["found"] == 1
    assert dry.json()["data"]["dryRun"] is True
    assert dry.json()["data"]["halfEdges"][0]["presentSide"] == "followings"

    res = await client.post("/api/v1/users/repair-edges")
    assert res.json()["data"]["dropped"] == 1

    again = await client.post("/api/v1/users/repair-edges")
    assert again.json()["data"]["found"] == 0


async def test_repair_edges_dry_run_writes_nothing(client):
    alice = await _create(client, "alice")
    await client.post(
        "/api/v1/users/follow",
        json={"userId": alice["id"], "followId": str(uuid4())},
    )

    res = await client.post("/api/v1/users/repair-edges?dryRun=true")
    assert res.status_code == 200
    assert res.json()["data"]["dropped"] == 0

    still = await client.post("/api/v1/users/repair-edges?dryRun=true")
    assert still.json()["data"]["found"] == 1


async def test_repair_edges_rejects_unknown_query_param(client):
    alice = await _create(client, "alice")
    await client.post(
        "/api/v1/users/follow",
        json={"userId": alice["id"], "followId": str(uuid4())},
    )

    res = await client.post("/api/v1/users/repair-edges?dry_run=true")
    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert body["error"]["code"] == "UNSUPPORTED_PARAMETER"

    # rejected request ran no pass: the half-edge is still there
    still = await client.post("/api/v1/users/repair-edges?dryRun=true")
    assert still.json()["data"]["found"] == 1


async def test_unknown_route_404_envelope(client):
    res = await client.get("/api/v1/users/nothing/here")
    assert res.status_code == 404
    body = res.json()
    assert body["success"] is False
    assert body["message"] == UserMessages.NOT_FOUND
