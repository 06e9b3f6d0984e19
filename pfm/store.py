"""Persistence of the local State document."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from .config import StateConfig
from .errors import StateCorrupt
from .models import State

logger = logging.getLogger(__name__)


class StateStore:
    """Loads and saves the single State document kept in a JSON file.

    The file is not locked. Two invocations running load-mutate-save at the
    same time can lose an update, so only one should run at a time.
    """

    def __init__(
        self,
        path: Optional[str | Path] = None,
        config: Optional[StateConfig] = None,
    ) -> None:
        self.config = config or StateConfig()
        self.path = Path(path) if path is not None else Path(self.config.STATE_FILE)

    def load(self) -> State:
        """Return the stored State, or an empty one if the file is absent.

        Loading never creates the file.

        Raises:
            StateCorrupt: If the file exists but is not a valid State document.
        """
        if not self.path.exists():
            logger.debug("No state file at %s, starting empty", self.path)
            return State()

        logger.debug("Loading state from %s", self.path)
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise StateCorrupt(self.path, str(e)) from e

        if not isinstance(data, dict):
            raise StateCorrupt(self.path, "top-level value must be an object")

        try:
            return State.from_dict(data)
        except ValueError as e:
            raise StateCorrupt(self.path, str(e)) from e

    def save(self, state: State) -> None:
        """Write the State as pretty-printed JSON, replacing the file atomically.

        The document is written to a temporary file next to the target and
        renamed over it, so readers see either the old or the new content.

        Raises:
            OSError: If the file cannot be written.
        """
        payload = json.dumps(state.to_dict(), indent=self.config.INDENT, allow_nan=False)
        directory = self.path.parent

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=directory
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise

        logger.debug(
            "Saved state to %s (%d holdings)",
            self.path,
            len(state.portfolio.currencies),
        )
