"""Walk generation - biased random traversal of the state graph."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterator

from statewalk.config import StatewalkSettings, default_settings
from statewalk.core.machine import Machine
from statewalk.core.walk import Walk
from statewalk.errors import NoStartStateError

logger = logging.getLogger(__name__)

_rng = random.Random()


def random_walk_length(
    rng: random.Random | None = None,
    settings: StatewalkSettings | None = None,
) -> int:
    """Draw a walk length from a normal distribution, floored at the minimum.

    The distribution is unbounded above, so long walks show up now and then.
    """
    rng = rng or _rng
    settings = settings or default_settings()
    drawn = round(rng.gauss(settings.walk_length_mean, settings.walk_length_spread))
    return max(settings.min_walk_length, drawn)


def generate_walk(
    machine: Machine,
    length: int | None = None,
    *,
    rng: random.Random | None = None,
    settings: StatewalkSettings | None = None,
) -> Walk:
    """Generate one random walk through ``machine``.

    Picks a start state uniformly, then follows uniformly chosen outgoing
    edges for up to ``length`` steps. The walk stops early on a terminate
    state or on a state without edges.

    Raises:
        NoStartStateError: If the machine has no start state.
    """
    rng = rng or _rng
    starts = machine.starts
    if not starts:
        raise NoStartStateError("State machine has no start states")

    if length is None:
        length = random_walk_length(rng, settings)

    start = rng.choice(starts)
    current = start
    edges: list[str] = []
    for _ in range(length):
        state = machine.state(current)
        if state.is_terminal:
            break
        names = list(state.edges)
        if not names:
            # A state with no edges is an implicit terminate state
            break
        edge = rng.choice(names)
        edges.append(edge)
        current = state.edges[edge].to

    walk = Walk(start, tuple(edges))
    logger.debug("Generated walk of %d step(s) (target %d): %s", len(walk), length, walk)
    return walk


def generate_walks(
    machine: Machine,
    *,
    rng: random.Random | None = None,
    settings: StatewalkSettings | None = None,
) -> Iterator[Walk]:
    """Yield independently sampled walks forever."""
    while True:
        yield generate_walk(machine, rng=rng, settings=settings)


class WalkStream:
    """A restartable, infinite source of random walks.

    Each call to ``iter()`` starts a fresh lazy sequence, so the same
    stream can back several exploration loops.
    """

    def __init__(
        self,
        machine: Machine,
        *,
        rng: random.Random | None = None,
        settings: StatewalkSettings | None = None,
    ) -> None:
        self.machine = machine
        self.rng = rng
        self.settings = settings

    def __iter__(self) -> Iterator[Walk]:
        return generate_walks(self.machine, rng=self.rng, settings=self.settings)
