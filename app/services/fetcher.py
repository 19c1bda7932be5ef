"""Record fetcher: pull every property record below the current count."""

import asyncio

from app.core.exceptions import ReadFailure
from app.core.logging import get_logger
from app.models.property import PropertyRecord
from app.services.ledger import Ledger

logger = get_logger(__name__)


async def fetch_all(
    ledger: Ledger,
    count: int,
    concurrency: int = 8,
) -> list[PropertyRecord]:
    """Fetch records 0..count-1 in index order.

    Reads run concurrently up to ``concurrency`` at a time. If any read fails
    the reads still in flight are cancelled and the whole batch fails with
    ReadFailure; a partial list is never returned.
    """
    if count < 0:
        raise ReadFailure(f"Property count cannot be negative: {count}")

    semaphore = asyncio.Semaphore(max(1, concurrency))

    async def fetch_one(index: int) -> PropertyRecord:
        async with semaphore:
            record = await ledger.get_record(index)
        if record.id != index:
            raise ReadFailure(f"Ledger returned record {record.id} for index {index}")
        return record

    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(fetch_one(i)) for i in range(count)]
    except ExceptionGroup as errors:
        failure = next((e for e in errors.exceptions if isinstance(e, ReadFailure)), None)
        if failure is None:
            raise
        raise failure from None

    records = [task.result() for task in tasks]
    logger.debug("Fetched %d property records", len(records))
    return records
