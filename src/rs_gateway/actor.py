"""FastAPI dependency: get_actor.

Authentication happens upstream; the auth proxy forwards the caller identity
as X-User-Id / X-User-Name. Mutating endpoints depend on this so every write
can be stamped with who made it.

Usage:
    @router.post("/orders")
    async def create(actor: Annotated[Actor, Depends(get_actor)]):
        ...
"""

from typing import Annotated

from fastapi import Header

from src.rs_common.actor import Actor
from src.rs_common.errors import MissingActorError


async def get_actor(
    x_user_id: Annotated[str | None, Header()] = None,
    x_user_name: Annotated[str | None, Header()] = None,
) -> Actor:
    """Raises MissingActorError (9003 / 401) if either header is missing or blank."""
    if not x_user_id or not x_user_id.strip():
        raise MissingActorError()
    if not x_user_name or not x_user_name.strip():
        raise MissingActorError()
    return Actor(user_id=x_user_id.strip(), user_name=x_user_name.strip())
