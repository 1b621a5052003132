"""Shrinking - cut cycles out of a failing walk while it keeps failing."""

from __future__ import annotations

import logging

from statewalk.core.machine import Machine
from statewalk.core.walk import Walk
from statewalk.cycles import reductions
from statewalk.errors import WalkFailure
from statewalk.executor import execute_walk

logger = logging.getLogger(__name__)


async def replay(machine: Machine, walk: Walk) -> WalkFailure | None:
    """Execute ``walk`` and return its failure, or None if it succeeds."""
    try:
        await execute_walk(machine, walk)
    except WalkFailure as failure:
        return failure
    return None


async def _greedy_pass(machine: Machine, walk: Walk) -> tuple[Walk, WalkFailure | None]:
    best = walk
    best_failure: WalkFailure | None = None
    tried = 0

    # One pass over the cycles of the original walk; adopted candidates are
    # not shrunk again.
    for candidate in reductions(machine, walk):
        if len(candidate) >= len(best):
            continue
        tried += 1
        failure = await replay(machine, candidate)
        if failure is None:
            logger.debug("Candidate no longer fails, discarding: %s", candidate)
            continue
        logger.debug("Adopting %d-step candidate: %s", len(candidate), candidate)
        best, best_failure = candidate, failure

    if best_failure is not None:
        logger.info(
            "Shrunk walk from %d to %d transition(s) after %d replay(s)",
            len(walk),
            len(best),
            tried,
        )
    else:
        logger.info("No smaller failing walk found among %d replay(s)", tried)
    return best, best_failure


async def minimize(machine: Machine, walk: Walk) -> Walk:
    """Return the shortest still-failing walk obtained by removing one cycle.

    Every cycle of ``walk`` is cut out in turn and the resulting candidate
    is replayed. Candidates that still fail and are strictly shorter than
    the best so far replace it. If none qualifies, ``walk`` itself is
    returned. Non-deterministic effects can make the result unstable.
    """
    best, _ = await _greedy_pass(machine, walk)
    return best


async def shrink(machine: Machine, failure: WalkFailure) -> WalkFailure:
    """Minimize a failure, returning the failure of the best candidate.

    Returns ``failure`` unchanged when no smaller failing walk exists.
    """
    _, best_failure = await _greedy_pass(machine, failure.walk)
    return best_failure or failure
