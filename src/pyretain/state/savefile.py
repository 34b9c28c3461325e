"""Save file reading and writing.

The save file always holds the complete persisted state. Writes replace the
whole file; with ``atomic=True`` they go through a temporary file in the
same directory that is renamed into place, so a crash mid-write leaves the
previous file intact.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from pyretain.exceptions import SaveFileError, SaveFileMalformedError, SaveFileMissingError
from pyretain.models.records import PersistedState

_logger = logging.getLogger(__name__)


def read_save_file(path: Path) -> PersistedState:
    """Read and validate the save file at *path*.

    Raises
    ------
    SaveFileMissingError
        No file exists at *path*.
    SaveFileMalformedError
        The content is not JSON, its top level is not an object, or an
        entry does not have the expected shape.
    SaveFileError
        The file exists but could not be read.
    """
    try:
        with open(path, encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError as exc:
        raise SaveFileMissingError(f"No save file at {path}", path=path) from exc
    except UnicodeDecodeError as exc:
        raise SaveFileMalformedError(f"Save file {path} is not UTF-8 text", path=path) from exc
    except OSError as exc:
        raise SaveFileError(f"Cannot read save file {path}: {exc}", path=path) from exc

    try:
        data = json.loads(content)
    except (ValueError, RecursionError) as exc:
        raise SaveFileMalformedError(f"Invalid JSON in {path}: {exc}", path=path) from exc

    if not isinstance(data, dict):
        raise SaveFileMalformedError(
            f"Expected a JSON object in {path}, got {type(data).__name__}",
            path=path,
        )

    try:
        state = PersistedState.model_validate(data)
    except ValidationError as exc:
        raise SaveFileMalformedError(
            f"Unexpected save file shape in {path} ({exc.error_count()} errors)",
            path=path,
        ) from exc
    except RecursionError as exc:
        raise SaveFileMalformedError(f"Save file {path} is nested too deeply", path=path) from exc

    _logger.debug("Read %d screens from %s", len(state), path)
    return state


def write_save_file(path: Path, state: PersistedState, *, atomic: bool = True) -> None:
    """Serialize *state* and overwrite the file at *path*."""
    text = json.dumps(state.to_payload(), indent=2)
    path.parent.mkdir(parents=True, exist_ok=True)

    if not atomic:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        return

    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f"{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise
