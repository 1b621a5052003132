"""The check driver: explore random walks, shrink the first failure."""

from __future__ import annotations

import logging
import random

from statewalk.config import StatewalkSettings, default_settings
from statewalk.core.machine import Machine
from statewalk.core.result import CheckResult
from statewalk.errors import ConfigValidationError, WalkFailure
from statewalk.executor import execute_walk
from statewalk.generator import WalkStream
from statewalk.shrinker import shrink

logger = logging.getLogger(__name__)


async def check(
    machine: Machine,
    exploration_limit: int | None = None,
    *,
    rng: random.Random | None = None,
    settings: StatewalkSettings | None = None,
) -> CheckResult:
    """Execute up to ``exploration_limit`` random walks against ``machine``.

    Exploration stops at the first failing walk. That failure is shrunk
    (unless disabled in settings) and returned on the result; nothing is
    retried. If every walk succeeds the result is successful.

    Raises:
        NoStartStateError: If the machine has no start state.
    """
    settings = settings or default_settings()
    limit = exploration_limit if exploration_limit is not None else settings.exploration_limit
    if limit <= 0:
        raise ConfigValidationError(
            f"exploration_limit must be positive, got {limit}",
            field="exploration_limit",
            value=limit,
        )

    result = CheckResult(exploration_limit=limit)
    logger.info("Checking machine with %d state(s), up to %d walk(s)", len(machine), limit)

    walks = iter(WalkStream(machine, rng=rng, settings=settings))
    for _ in range(limit):
        walk = next(walks)
        result.walks_explored += 1
        try:
            await execute_walk(machine, walk)
        except WalkFailure as failure:
            logger.info(
                "Walk %d failed at step %d: %s",
                result.walks_explored,
                failure.index,
                failure.walk,
            )
            result.steps_taken += failure.index + 1
            result.original_failure = failure
            result.failure = await shrink(machine, failure) if settings.shrink else failure
            break
        result.steps_taken += len(walk)

    result.finish()
    if result.success:
        logger.info("All %d walk(s) passed", result.walks_explored)
    return result
