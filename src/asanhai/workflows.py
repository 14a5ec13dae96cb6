"""Shared workflow layer between the CLI and the core.

Wires the in-memory task store to file storage so every mutation is saved.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable

from .adapters.file_state import FileStateStore
from .config import DATA_DIR, Config
from .core.store import AppState, TaskStore
from .ports.state_store import StateStore

logger = logging.getLogger(__name__)


def get_state_store(config: Config) -> FileStateStore:
    """Resolve data directory from config."""
    if config.data_dir:
        return FileStateStore(Path(config.data_dir).expanduser())
    return FileStateStore(DATA_DIR)


def persist_to(storage: StateStore) -> Callable[[AppState], None]:
    """Change listener that saves every new state, logging failures."""

    def _save(state: AppState) -> None:
        try:
            storage.save(state)
        except OSError as e:
            logger.error(f"Failed to save state: {e}")

    return _save


def open_store(
    config: Config,
    clock: Callable[[], datetime] = datetime.now,
) -> TaskStore:
    """Load saved state and return a store that saves after each change."""
    storage = get_state_store(config)
    store = TaskStore(storage.load(), clock=clock)
    store.subscribe(persist_to(storage))
    return store
