"""Walk and TraceEntry - the values threaded through generation and shrinking."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Walk:
    """A starting state plus an ordered sequence of edge names.

    Walks are immutable: shrinking and truncation always build new walks.
    A walk is not assumed to be well-formed; consumers validate each edge
    against the state reached so far.

    Attributes:
        start: Name of the state the walk departs from.
        edges: Edge names to follow, in order.
    """

    start: str
    edges: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.edges, tuple):
            object.__setattr__(self, "edges", tuple(self.edges))

    @classmethod
    def of(cls, start: str, edges: Iterable[str] = ()) -> Walk:
        return cls(start=start, edges=tuple(edges))

    def __len__(self) -> int:
        return len(self.edges)

    def prefix(self, n: int) -> Walk:
        """The walk made of the first ``n`` edges."""
        return Walk(self.start, self.edges[:n])

    def without(self, i: int, j: int) -> Walk:
        """The walk with the half-open range ``[i, j)`` of edges removed."""
        if not 0 <= i <= j <= len(self.edges):
            raise ValueError(f"Invalid range [{i}, {j}) for walk of length {len(self.edges)}")
        return Walk(self.start, self.edges[:i] + self.edges[j:])

    def segment(self, i: int, j: int, start: str) -> Walk:
        """Edges ``[i, j)`` as a walk of their own, departing from ``start``."""
        return Walk(start, self.edges[i:j])

    def __str__(self) -> str:
        if not self.edges:
            return self.start
        return f"{self.start}: " + " -> ".join(self.edges)


@dataclass(frozen=True)
class TraceEntry:
    """One completed step of a walk: ``from -> to via "edge"``."""

    from_state: str
    to_state: str
    edge: str
    index: int

    def __str__(self) -> str:
        return f'{self.from_state} -> {self.to_state} via "{self.edge}"'
