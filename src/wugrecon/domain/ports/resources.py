"""Ports for reaching the remote system of record for managed resources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(slots=True, frozen=True)
class Submission:
    """Outcome of a create call.

    ``identifier`` is empty when the response did not carry one; ``raw`` is the
    response body, kept for error reporting.
    """

    identifier: str
    raw: bytes


@dataclass(slots=True, frozen=True)
class Observation[R]:
    """What the remote reported for one identifier.

    ``record`` is only set when exactly one object matched.
    """

    match_count: int
    record: R | None = None


@runtime_checkable
class ResourceGateway[R](Protocol):
    """Create, observe and remove one kind of remote object."""

    def submit(self, desired: R) -> Submission: ...

    def observe(self, identifier: str, desired: R) -> Observation[R]: ...

    def remove(self, identifier: str, desired: R) -> None: ...


__all__ = ["Observation", "ResourceGateway", "Submission"]
