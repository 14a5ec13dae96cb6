"""State storage interface."""

from typing import Protocol

from asanhai.core.store import AppState


class StateStore(Protocol):
    """Interface for loading and saving the task/history snapshot."""

    def load(self) -> AppState:
        """Load saved state, or an empty state if nothing is saved."""
        ...

    def save(self, state: AppState) -> None:
        """Persist the full current state."""
        ...
