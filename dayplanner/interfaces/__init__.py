"""Abstract interfaces for collaborator abstraction."""

from dayplanner.interfaces.unavailability_store import IUnavailabilityStore

__all__ = [
    "IUnavailabilityStore",
]
