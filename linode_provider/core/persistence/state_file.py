"""
State file persistence — atomic read/write for ProviderState.

State lives in .state/resources.json next to provider.yml (or the
working directory). Writes go to a temp file in the same directory and
are renamed into place, so a crash never leaves half a file behind.
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path

from linode_provider.core.models.state import ProviderState

logger = logging.getLogger(__name__)

DEFAULT_STATE_DIR = ".state"
DEFAULT_STATE_FILE = "resources.json"


def default_state_path(root: Path) -> Path:
    """The state file path under a project root."""
    return root / DEFAULT_STATE_DIR / DEFAULT_STATE_FILE


def load_state(path: Path) -> ProviderState:
    """Load provider state from a JSON file.

    A missing or unreadable file yields a fresh, empty state; the
    problem is logged as a warning.
    """
    if not path.is_file():
        logger.info("No state file at %s — starting fresh", path)
        return ProviderState()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        state = ProviderState.model_validate(data)
    except json.JSONDecodeError as e:
        logger.warning("Corrupt state file %s: %s — starting fresh", path, e)
        return ProviderState()
    except Exception as e:
        logger.warning("Cannot load state from %s: %s — starting fresh", path, e)
        return ProviderState()

    logger.debug("Loaded %d resource(s) from %s", len(state.resources), path)
    return state


def save_state(state: ProviderState, path: Path) -> None:
    """Write provider state atomically (temp file + rename)."""
    state.touch()
    path.parent.mkdir(parents=True, exist_ok=True)

    content = json.dumps(state.model_dump(mode="json"), indent=2, ensure_ascii=False) + "\n"

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".resources_", suffix=".tmp")
    tmp = Path(tmp_name)
    try:
        with open(fd, "w", encoding="utf-8") as fh:
            fh.write(content)
        tmp.replace(path)
    except Exception as e:
        tmp.unlink(missing_ok=True)
        logger.error("Failed to save state to %s: %s", path, e)
        raise

    logger.debug("State saved to %s", path)
