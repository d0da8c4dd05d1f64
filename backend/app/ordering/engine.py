"""Fractional ordering of activities within a bucket.

Every activity carries a float order_index; siblings in the same bucket
(an itinerary day or the travel wishlist) are displayed in ascending
order_index. Moving one activity only rewrites that activity's index:

- Append: max index in the bucket + step (step itself when empty)
- Between two neighbors: their midpoint
- After the last neighbor: neighbor + step
- Before the first neighbor: neighbor - step, or half the neighbor
  when that would not stay positive

Bounds are trusted to be adjacent siblings as the client saw them; the
engine only checks that they exist and share the target bucket. Two
concurrent reorders may therefore interleave into a surprising, but
still valid, order.

When float precision runs out between two neighbors, the whole bucket is
renumbered to consecutive multiples of step (display order kept)
before the requested position is computed again. That is the only
multi-row write; it is flushed into the caller's transaction and becomes
visible on the caller's single commit.

Nothing here commits, logs or caches.
"""

import math
import uuid
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.config import get_settings
from backend.app.db.activities import (
    get_activity,
    max_order_index,
    place_activity,
    renumber_bucket,
)
from backend.app.db.records import ActivityRecord
from backend.app.db.travels import get_itinerary
from backend.app.errors import InvalidArgumentError, NotFoundError
from backend.app.ordering.bucket import Bucket, Wishlist, bucket_of


@dataclass(frozen=True)
class Position:
    """Target slot: strictly after after_id and strictly before before_id."""

    after_id: uuid.UUID | None = None
    before_id: uuid.UUID | None = None


@dataclass(frozen=True)
class Placement:
    """Outcome of an ordering operation."""

    activity_id: uuid.UUID
    bucket: Bucket
    order_index: float
    renumbered: bool = False


def _step() -> float:
    return get_settings().order_step


def index_between(after: float | None, before: float | None, step: float) -> float | None:
    """Compute an index strictly after `after` and strictly before `before`.

    Args:
        after: Index of the neighbor that must come first, if any
        before: Index of the neighbor that must come next, if any
        step: Gap used when only one neighbor is known

    Returns:
        The new index, or None when no representable value fits (the
        gap is exhausted, or both neighbors share one index)
    """
    if after is None and before is None:
        raise ValueError("index_between needs at least one neighbor")

    if after is not None and before is not None:
        lower, upper = min(after, before), max(after, before)
        candidate = (after + before) / 2
        if lower < candidate < upper:
            return candidate
        return None

    if after is not None:
        candidate = after + step
        return candidate if math.isfinite(candidate) and candidate > after else None

    assert before is not None
    candidate = before - step
    if candidate <= 0:
        candidate = before / 2
    return candidate if 0 < candidate < before else None


async def append_index(session: AsyncSession, bucket: Bucket) -> float:
    """Index that places a new activity at the end of a bucket.

    Returns:
        Highest existing index + step, or step for an empty bucket
    """
    step = _step()
    current_max = await max_order_index(session, bucket)
    if current_max is None:
        return step
    return current_max + step


async def _require_activity(session: AsyncSession, activity_id: uuid.UUID) -> ActivityRecord:
    activity = await get_activity(session, activity_id)
    if activity is None:
        raise NotFoundError(f"Activity {activity_id} not found")
    return activity


async def _bound_index(
    session: AsyncSession,
    bound_id: uuid.UUID | None,
    *,
    label: str,
    moving: ActivityRecord,
    bucket: Bucket,
) -> float | None:
    if bound_id is None:
        return None
    if bound_id == moving.activity_id:
        raise InvalidArgumentError(f"{label} activity cannot be the activity being moved")

    bound = await get_activity(session, bound_id)
    if bound is None:
        raise NotFoundError(f"{label} activity {bound_id} not found")
    if bound.travel_id != moving.travel_id or bucket_of(bound) != bucket:
        raise InvalidArgumentError(f"{label} activity {bound_id} is not in the target bucket")
    return bound.order_index


async def _check_bucket(
    session: AsyncSession, activity: ActivityRecord, bucket: Bucket
) -> None:
    if isinstance(bucket, Wishlist):
        if bucket.travel_id != activity.travel_id:
            raise InvalidArgumentError("Wishlist belongs to a different travel")
        return

    itinerary = await get_itinerary(session, bucket.itinerary_id)
    if itinerary is None:
        raise NotFoundError(f"Itinerary {bucket.itinerary_id} not found")
    if itinerary.travel_id != activity.travel_id:
        raise InvalidArgumentError("Itinerary belongs to a different travel")


async def _place(
    session: AsyncSession,
    activity: ActivityRecord,
    bucket: Bucket,
    position: Position,
) -> Placement:
    if position.after_id is not None and position.after_id == position.before_id:
        raise InvalidArgumentError("After and before activity must be different activities")

    step = _step()
    after = await _bound_index(
        session, position.after_id, label="After", moving=activity, bucket=bucket
    )
    before = await _bound_index(
        session, position.before_id, label="Before", moving=activity, bucket=bucket
    )

    if after is None and before is None:
        order_index = await append_index(session, bucket)
        await place_activity(session, activity.activity_id, bucket, order_index)
        return Placement(activity.activity_id, bucket, order_index)

    renumbered = False
    order_index = index_between(after, before, step)
    if order_index is None:
        new_indexes = await renumber_bucket(session, bucket, step)
        renumbered = True
        after = new_indexes[position.after_id] if position.after_id is not None else None
        before = new_indexes[position.before_id] if position.before_id is not None else None
        order_index = index_between(after, before, step)
        if order_index is None:
            # Distinct renumbered neighbors sit whole steps apart
            raise InvalidArgumentError("No slot between the given activities")

    await place_activity(session, activity.activity_id, bucket, order_index)
    return Placement(activity.activity_id, bucket, order_index, renumbered=renumbered)


async def reorder(
    session: AsyncSession,
    activity_id: uuid.UUID,
    position: Position,
) -> Placement:
    """Move an activity to a new slot inside its current bucket.

    Args:
        session: Database session (the caller commits)
        activity_id: Activity to move
        position: Neighbors to land between; empty means move to the end

    Returns:
        Placement with the new order_index

    Raises:
        NotFoundError: If the activity or a bound does not exist
        InvalidArgumentError: If a bound lives in another bucket, is the
            activity itself, or both bounds name the same activity
    """
    activity = await _require_activity(session, activity_id)
    return await _place(session, activity, bucket_of(activity), position)


async def reassign_bucket(
    session: AsyncSession,
    activity_id: uuid.UUID,
    bucket: Bucket,
    position: Position | None = None,
) -> Placement:
    """Move an activity into another bucket of the same travel.

    Without a position the activity is appended to the destination's end.
    Reassigning into the current bucket behaves like reorder.

    Raises:
        NotFoundError: If the activity, itinerary or a bound does not exist
        InvalidArgumentError: If the destination belongs to another travel
            or a bound is not in the destination bucket
    """
    activity = await _require_activity(session, activity_id)
    await _check_bucket(session, activity, bucket)
    return await _place(session, activity, bucket, position or Position())
