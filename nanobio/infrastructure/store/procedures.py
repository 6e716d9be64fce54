"""Store procedures run by SqlRecordStore inside its write transaction."""

from collections.abc import Awaitable, Callable
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.exc import NoResultFound
from sqlalchemy.ext.asyncio import AsyncSession

from nanobio.application.common.protocols import ChangeEvent, ChangeType
from nanobio.constants import INCREMENT_XP_PROCEDURE
from nanobio.database import Base
from nanobio.domain.common.value_objects import UserId
from nanobio.domain.progression.entities.profile import Profile

Procedure = Callable[[AsyncSession, dict[str, Any]], Awaitable[list[ChangeEvent]]]


async def increment_xp(session: AsyncSession, params: dict[str, Any]) -> list[ChangeEvent]:
    """
    Add ``x`` experience to profile ``uid`` and raise its level if earned.

    The row is locked for the read-modify-write where the backend supports it.
    """
    profiles = Base.metadata.tables["profiles"]
    user_id = str(params["uid"])
    amount = int(params["x"])

    stmt = select(profiles).where(profiles.c.id == user_id).with_for_update()
    row = (await session.execute(stmt)).mappings().first()
    if row is None:
        raise NoResultFound(f"No profile for user {user_id}")

    current = Profile(id=UserId(row["id"]), xp=row["xp"], level=row["level"], streak=row["streak"])
    awarded = current.awarded(amount)

    result = await session.execute(
        update(profiles)
        .where(profiles.c.id == user_id)
        .values(xp=awarded.xp, level=awarded.level)
        .returning(*profiles.c)
    )
    return [ChangeEvent("profiles", ChangeType.UPDATE, dict(result.mappings().one()))]


DEFAULT_PROCEDURES: dict[str, Procedure] = {
    INCREMENT_XP_PROCEDURE: increment_xp,
}
