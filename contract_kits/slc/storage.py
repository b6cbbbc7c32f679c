"""
Contract Kit - on-disk artifacts

A contract directory holds:
- state.json       current contract state (read by requests, written by init and requests)
- data.json        static contract data injected into the clause (read-only)
- requests/*.json  one request payload per clause

Loading never raises: callers get a LoadResult tagged with what went wrong
(missing, empty, unreadable, unparseable) so they can choose how to recover.
Saving never raises either: it logs and returns False.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)

STATE_FILENAME = "state.json"
DATA_FILENAME = "data.json"
REQUESTS_DIRNAME = "requests"


class LoadStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    EMPTY = "empty"
    UNREADABLE = "unreadable"
    PARSE_ERROR = "parse_error"


@dataclass(frozen=True)
class LoadResult:
    status: LoadStatus
    path: str
    value: Any = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is LoadStatus.OK

    def __bool__(self) -> bool:
        return self.ok


def load_json(path: Union[str, Path]) -> LoadResult:
    """Read a JSON file and parse it.

    Returns a LoadResult; value is only meaningful when status is OK.
    """
    uri = str(path)
    try:
        raw = Path(path).read_bytes()
    except FileNotFoundError:
        detail = f"Impossible to retrieve file {uri}: not found."
        logger.error(detail)
        return LoadResult(LoadStatus.NOT_FOUND, uri, detail=detail)
    except OSError as e:
        detail = f"Impossible to retrieve file {uri}: {e}"
        logger.error(detail)
        return LoadResult(LoadStatus.UNREADABLE, uri, detail=detail)

    if not raw.strip():
        detail = f"Impossible to retrieve file {uri}: file is empty."
        logger.error(detail)
        return LoadResult(LoadStatus.EMPTY, uri, detail=detail)

    try:
        value = json.loads(raw)
    except ValueError as e:
        # json.JSONDecodeError and UnicodeDecodeError are both ValueErrors
        detail = f"Impossible to parse file {uri}: {e}"
        logger.error(detail)
        return LoadResult(LoadStatus.PARSE_ERROR, uri, detail=detail)

    return LoadResult(LoadStatus.OK, uri, value=value)


@dataclass(frozen=True)
class ContractLayout:
    """File locations inside one contract directory."""

    root: Path

    @classmethod
    def from_directory(cls, directory: Union[str, Path]) -> "ContractLayout":
        return cls(root=Path(directory))

    @property
    def state_path(self) -> Path:
        return self.root / STATE_FILENAME

    @property
    def data_path(self) -> Path:
        return self.root / DATA_FILENAME

    @property
    def requests_dir(self) -> Path:
        return self.root / REQUESTS_DIRNAME

    def request_path(self, filename: str) -> Path:
        return self.requests_dir / filename


class ContractStorage:
    """Read contract artifacts and persist contract state."""

    def __init__(self, layout: ContractLayout):
        self.layout = layout

    def load_state(self) -> LoadResult:
        return load_json(self.layout.state_path)

    def load_data(self) -> LoadResult:
        return load_json(self.layout.data_path)

    def load_request(self, path: Union[str, Path]) -> LoadResult:
        return load_json(path)

    def save_state(self, state: Any) -> bool:
        """Overwrite state.json with the given JSON-compatible value.

        The write goes to a temp file in the same directory which then
        replaces state.json, so readers never see a partial document.
        """
        target = self.layout.state_path
        try:
            # Compact form like JSON.stringify; NaN and Infinity are refused, they are not JSON
            payload = json.dumps(state, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as e:
            logger.error(f"Writing state failed: state is not valid JSON: {e}")
            return False

        tmp_name = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=str(target.parent), prefix=".state-", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, target)
            tmp_name = None
            return True
        except OSError as e:
            logger.error(f"Writing state failed: {e}")
            return False
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
