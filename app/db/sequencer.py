"""
Food Ordering API — Queue number sequencer

Every placed order gets the next number from a single counter row. The
counter is advanced with optimistic locking:

  - READ:  fetch value + version_id of the counter row
  - WRITE: UPDATE ... WHERE version_id = <read_version>
  - If another transaction committed first the UPDATE matches no row,
    the transaction is rolled back and the whole read-compute-write is
    retried with backoff.

The first order ever finds no row and INSERTs it with value 1; two
concurrent first orders collide on the primary key and the loser retries
against the row the winner created. Numbers are handed out in commit
order and the counter value is never kept in process memory.
"""
import logging

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.errors import SequencerError
from app.core.metrics import QUEUE_COUNTER_CONFLICTS
from app.core.optimistic_lock import StaleDataError, with_optimistic_retry
from app.db.database import utcnow
from app.models.counter import Counter

logger = logging.getLogger(__name__)


@with_optimistic_retry()
async def _advance_counter(db: AsyncSession, name: str) -> int:
    result = await db.execute(
        select(Counter.value, Counter.version_id).where(Counter.name == name)
    )
    row = result.one_or_none()

    if row is None:
        db.add(Counter(name=name, value=1, version_id=1, updated_at=utcnow()))
        try:
            await db.commit()
        except IntegrityError:
            # Another first order created the row concurrently
            await db.rollback()
            QUEUE_COUNTER_CONFLICTS.inc()
            raise StaleDataError(f"Counter '{name}' was created concurrently.")
        return 1

    current_value, current_version = row
    next_value = current_value + 1

    result = await db.execute(
        update(Counter)
        .where(Counter.name == name, Counter.version_id == current_version)
        .values(value=next_value, version_id=current_version + 1, updated_at=utcnow())
        .execution_options(synchronize_session=False)
    )

    if result.rowcount == 0:
        # Another transaction won the race → trigger retry
        await db.rollback()
        QUEUE_COUNTER_CONFLICTS.inc()
        raise StaleDataError(f"Counter '{name}' version changed concurrently.")

    await db.commit()
    return next_value


async def next_queue_number(db: AsyncSession, name: str | None = None) -> int:
    """
    Durably advance the queue counter and return the new value.

    Each successful call consumes exactly one number; nothing is ever
    handed back. Raises SequencerError when the counter cannot be
    advanced, in which case no number was consumed.
    """
    name = name or get_settings().QUEUE_COUNTER_NAME
    try:
        return await _advance_counter(db, name)
    except StaleDataError as exc:
        logger.error("Queue counter '%s' contention not resolved: %s", name, exc)
        raise SequencerError() from exc
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Queue counter '%s' could not be advanced", name)
        raise SequencerError() from exc
