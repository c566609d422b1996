"""Create/read/delete lifecycle for managed resources.

There is no update transition. Every field of a desired-state record is
immutable, so a changed record is realised by the caller as delete followed by
create; ``update`` only refreshes the observed state.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from wugrecon.domain.errors import AmbiguousResult, CreateFailed, MappingError, ResourceNotFound

from .state import ResourceInstance, ResourceState

if TYPE_CHECKING:
    from wugrecon.domain.ports import ResourceGateway
    from wugrecon.domain.records import ResourceKind

log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationEngine[R]:
    """Drive one resource kind through its lifecycle against a gateway."""

    kind: ResourceKind
    gateway: ResourceGateway[R]

    def track(self, desired: R, identifier: str = "") -> ResourceInstance[R]:
        """Return a handle for ``desired``, optionally bound to a known identifier."""

        state = ResourceState.PRESENT if identifier else ResourceState.ABSENT
        return ResourceInstance(desired=desired, identifier=identifier, state=state)

    def create(self, instance: ResourceInstance[R]) -> R | None:
        """Create the remote object, then read it back.

        A create that yields no identifier raises ``CreateFailed`` and leaves the
        instance absent. If the follow-up read fails, the identifier is kept: the
        remote object exists and the next reconciliation has to pick it up.
        """

        instance.state = ResourceState.CREATING
        try:
            submission = self.gateway.submit(instance.desired)
        except Exception:
            instance.state = ResourceState.ABSENT
            raise

        if not submission.identifier:
            instance.state = ResourceState.ABSENT
            raise CreateFailed(submission.raw.decode("utf-8", errors="replace"))

        instance.identifier = submission.identifier
        instance.state = ResourceState.CREATED
        log.info("Created %s with ID: %s", self.kind, instance.identifier)

        return self.read(instance)

    def read(self, instance: ResourceInstance[R]) -> R | None:
        """Refresh ``instance.observed``; return ``None`` if the object is gone."""

        if not instance.identifier:
            return self._forget(instance)

        previous = instance.state
        instance.state = ResourceState.READING
        try:
            observation = self.gateway.observe(instance.identifier, instance.desired)
        except ResourceNotFound:
            return self._forget(instance)
        except Exception:
            instance.state = previous
            raise

        if observation.match_count == 0:
            return self._forget(instance)
        if observation.match_count > 1:
            instance.state = previous
            raise AmbiguousResult(instance.identifier, observation.match_count)
        if observation.record is None:
            instance.state = previous
            raise MappingError(f"No {self.kind} payload for {instance.identifier}")

        instance.observed = observation.record
        instance.state = ResourceState.PRESENT
        return observation.record

    def update(self, instance: ResourceInstance[R]) -> R | None:
        """Refresh only. Changes are applied by replacing the resource."""

        return self.read(instance)

    def delete(self, instance: ResourceInstance[R]) -> None:
        """Remove the remote object and clear the identifier.

        An object that is already gone counts as deleted. Any other failure
        leaves the instance present so the delete can be retried.
        """

        if not instance.identifier:
            self._forget(instance)
            return

        instance.state = ResourceState.DELETING
        try:
            self.gateway.remove(instance.identifier, instance.desired)
        except ResourceNotFound:
            log.info("%s %s was already removed", self.kind, instance.identifier)
        except Exception:
            instance.state = ResourceState.PRESENT
            raise
        else:
            log.info("Deleted %s with ID: %s", self.kind, instance.identifier)

        self._forget(instance)

    def _forget(self, instance: ResourceInstance[R]) -> None:
        if instance.identifier and instance.state is not ResourceState.DELETING:
            log.info("%s %s no longer exists remotely", self.kind, instance.identifier)
        instance.identifier = ""
        instance.observed = None
        instance.state = ResourceState.ABSENT
