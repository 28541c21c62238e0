"""User Accounts — creation, username rules and duplicate detection.

Invariants tested:
    - "ab" rejected before the store is touched
    - Second "alice" rejected as DuplicateUsernameError
    - Unique index guard reports the same error when the pre-check is bypassed
"""

import pytest

from followgraph.core.errors import DuplicateUsernameError, InvalidUsernameError
from followgraph.services.user_accounts import UserAccountService


@pytest.fixture
def accounts(repo):
    return UserAccountService(repo)


async def test_create_user_persists_with_id(accounts, repo):
    user = await accounts.create_user("alice")
    assert user.id is not None
    assert user.username == "alice"
    stored = await repo.find_by_username("alice")
    assert stored is not None and stored.id == user.id


async def test_new_user_has_no_edges(accounts, repo):
    user = await accounts.create_user("alice")
    assert await repo.follower_ids(user.id) == []
    [listed] = await repo.list_with_peers()
    assert listed.followers == [] and listed.followings == []


async def test_short_username_rejected(accounts, repo):
    with pytest.raises(InvalidUsernameError):
        await accounts.create_user("ab")
    assert await repo.list_with_peers() == []


async def test_duplicate_username_rejected(accounts):
    await accounts.create_user("alice")
    with pytest.raises(DuplicateUsernameError):
        await accounts.create_user("alice")


async def test_unique_index_guards_race(accounts, repo, monkeypatch):
    """Both racers pass the pre-check; the insert itself must still refuse."""
    await accounts.create_user("alice")

    async def _never_found(username):
        return None

    monkeypatch.setattr(repo, "find_by_username", _never_found)
    with pytest.raises(DuplicateUsernameError):
        await accounts.create_user("alice")
    # Session still usable after the rolled-back insert
    assert len(await repo.list_with_peers()) == 1
