# =============================================================================
# lib/batch.py - Best-Effort Batch Runner
# =============================================================================
# Runs one async action per item concurrently and records the outcome of each.
# A failing item is logged and recorded; it never fails the batch.
#
# Used for cleanup work that must not block the primary operation, e.g.
# deleting a project's screenshots before the project row is removed.
#
# Usage:
#   result = await run_best_effort(urls, media.delete_image, label="delete image")
#   if not result.all_succeeded:
#       ...
# =============================================================================

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Generic, Iterable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class ItemFailure(Generic[T]):
    """One item that did not complete, with a short reason."""
    item: T
    reason: str


@dataclass
class BatchResult(Generic[T]):
    """Per-item outcomes of a best-effort batch."""
    succeeded: list[T] = field(default_factory=list)
    failed: list[ItemFailure[T]] = field(default_factory=list)

    @property
    def all_succeeded(self) -> bool:
        return not self.failed

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)


async def run_best_effort(
    items: Iterable[T],
    action: Callable[[T], Awaitable[Any]],
    label: str = "batch item",
) -> BatchResult[T]:
    """
    Run `action` for every item concurrently and wait for all to settle.

    An item fails if its action raises or returns exactly False. Anything
    else counts as success. Results keep the input order.

    Args:
        items: Items to process
        action: Async callable applied to each item
        label: Short description used in log lines

    Returns:
        BatchResult with succeeded items and (item, reason) failures
    """
    items = list(items)
    result: BatchResult[T] = BatchResult()

    if not items:
        return result

    outcomes = await asyncio.gather(
        *(action(item) for item in items),
        return_exceptions=True,
    )

    for item, outcome in zip(items, outcomes):
        if isinstance(outcome, BaseException):
            reason = f"{type(outcome).__name__}: {outcome}"
        elif outcome is False:
            reason = "reported failure"
        else:
            result.succeeded.append(item)
            continue

        logger.warning(f"Best-effort {label} failed for {item!r}: {reason}")
        result.failed.append(ItemFailure(item=item, reason=reason))

    logger.debug(
        f"Best-effort {label}: {len(result.succeeded)}/{result.total} succeeded"
    )
    return result
