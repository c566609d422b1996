"""Lifecycle state of one managed resource instance."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ResourceState(StrEnum):
    ABSENT = "absent"
    CREATING = "creating"
    CREATED = "created"
    READING = "reading"
    PRESENT = "present"
    DELETING = "deleting"


@dataclass(slots=True)
class ResourceInstance[R]:
    """Handle the caller keeps for one resource between reconciliation calls.

    The engine only ever writes ``identifier``, ``observed`` and ``state``;
    ``desired`` belongs to the caller.
    """

    desired: R
    identifier: str = ""
    observed: R | None = None
    state: ResourceState = ResourceState.ABSENT

    @property
    def exists(self) -> bool:
        return bool(self.identifier)
