"""Response Envelope — uniform success payloads and user-facing messages.

Invariants:
    - Success body is {status, message, success: true} plus `data` when there is a payload
    - Failure bodies come from FollowGraphError.to_response() with the same top-level keys
"""

from typing import Any

from pydantic import BaseModel


class UserMessages:
    CREATED = "User created successfully"
    ALL_USERS = "All users retrieved successfully"
    FOLLOWED = "User followed successfully"
    UNFOLLOWED = "User unfollowed successfully"
    DAILY_FOLLOWERS = "Daily follower counts retrieved successfully"
    MUTUAL_FOLLOWERS = "Mutual followers retrieved successfully"
    EDGES_REPAIRED = "Half-edge repair pass completed"
    NOT_FOUND = "Route not found"


def _dump(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, list):
        return [_dump(item) for item in data]
    return data


def success_response(status: int, message: str, data: Any = None) -> dict:
    """Wrap a payload in the success envelope."""
    response: dict[str, Any] = {
        "status": status,
        "message": message,
        "success": True,
    }
    if data is not None:
        response["data"] = _dump(data)
    return response
