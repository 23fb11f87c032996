"""Compare-and-swap retry for read-modify-write sequences."""

from typing import Awaitable, Callable, TypeVar

import structlog

from core.exceptions import ConcurrentModificationError, StaleVersionError

logger = structlog.get_logger()

T = TypeVar("T")


async def retry_on_stale(
    attempt: Callable[[], Awaitable[T]],
    *,
    attempts: int,
    resource: str,
    resource_id: str,
) -> T:
    """Run ``attempt`` until its conditional write lands.

    Each call of ``attempt`` must open its own unit of work, re-read the
    aggregate and write it back with a version check. A lost race surfaces
    as ``StaleVersionError`` and the whole attempt is replayed.

    Raises:
        ConcurrentModificationError: After ``attempts`` lost races.
    """
    for attempt_no in range(1, attempts + 1):
        try:
            return await attempt()
        except StaleVersionError as exc:
            logger.info(
                "versioned_write_conflict",
                resource=resource,
                resource_id=resource_id,
                attempt=attempt_no,
                expected_version=exc.expected_version,
            )
    raise ConcurrentModificationError(resource, resource_id)
