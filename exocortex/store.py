"""Event store protocol.

Persistence lives outside the engine. Any store the application uses (a local
key-value store, a file, a test fake) only has to expose these two reads. The
engine depends on the protocol, never on a concrete store.
"""

from typing import Protocol, runtime_checkable

from exocortex.domain.models import Event


@runtime_checkable
class EventStore(Protocol):
    """Read side of the application's event store."""

    def get_all_events(self) -> list[Event]:
        """Every stored event, in no guaranteed order."""
        ...

    def get_events_in_range(self, start_ms: int, end_ms: int) -> list[Event]:
        """Events whose end_time falls within [start_ms, end_ms], in no guaranteed order."""
        ...
