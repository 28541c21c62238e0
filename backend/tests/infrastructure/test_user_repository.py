"""SqlUserRepository — conditional writes report whether their precondition held."""

from datetime import datetime, timezone
from uuid import uuid4

from followgraph.core.domain_types import PeerView


def _now():
    return datetime.now(timezone.utc)


async def test_add_following_requires_owner(repo):
    assert await repo.add_following(uuid4(), uuid4(), _now()) is False


async def test_add_following_is_conditional_on_absence(repo, make_user):
    alice = await make_user("alice")
    target = uuid4()
    assert await repo.add_following(alice.id, target, _now()) is True
    assert await repo.add_following(alice.id, target, _now()) is False


async def test_add_follower_is_conditional_on_absence(repo, make_user):
    bob = await make_user("bob")
    fan = uuid4()
    assert await repo.add_follower(bob.id, fan, _now()) is True
    assert await repo.add_follower(bob.id, fan, _now()) is False
    assert await repo.follower_ids(bob.id) == [fan]


async def test_remove_is_conditional_on_presence(repo, make_user):
    alice = await make_user("alice")
    target = uuid4()
    assert await repo.remove_following(alice.id, target) is False
    await repo.add_following(alice.id, target, _now())
    assert await repo.remove_following(alice.id, target) is True
    assert await repo.remove_following(alice.id, target) is False


async def test_remove_follower_only_touches_owner(repo, make_user):
    alice = await make_user("alice")
    bob = await make_user("bob")
    fan = uuid4()
    await repo.add_follower(alice.id, fan, _now())
    await repo.add_follower(bob.id, fan, _now())

    assert await repo.remove_follower(alice.id, fan) is True
    assert await repo.follower_ids(alice.id) == []
    assert await repo.follower_ids(bob.id) == [fan]


async def test_find_peers_preserves_order_and_drops_unknown(repo, make_user):
    alice = await make_user("alice")
    bob = await make_user("bob")
    peers = await repo.find_peers([bob.id, uuid4(), alice.id])
    assert peers == [PeerView(bob.id, "bob"), PeerView(alice.id, "alice")]


async def test_find_peers_empty_input(repo):
    assert await repo.find_peers([]) == []


async def test_find_by_id_and_username(repo, make_user):
    alice = await make_user("alice")
    assert (await repo.find_by_id(alice.id)).username == "alice"
    assert (await repo.find_by_username("alice")).id == alice.id
    assert await repo.find_by_id(uuid4()) is None
    assert await repo.find_by_username("nobody") is None
