# src/trade_analyzer/storage/json_store.py
import json
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from loguru import logger

from trade_analyzer.models.team import Team


class JsonFileStore:
    """A small string key-value store kept in one JSON file.

    Values are stored as opaque strings, the same way browser local storage
    works. A missing or unreadable file reads as an empty store.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (IOError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read store file {self.path}: {e}. Treating as empty.")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Store file {self.path} does not hold an object. Treating as empty.")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)
        logger.debug(f"Stored {len(value)} chars under {key!r} in {self.path}.")

    def remove_item(self, key: str) -> None:
        data = self._read_all()
        if data.pop(key, None) is not None:
            self._write_all(data)
            logger.debug(f"Removed {key!r} from {self.path}.")


def serialize_teams(teams: Sequence[Team]) -> str:
    """JSON text of the canonical collection in its stored (camelCase) shape."""
    records: List[dict] = [t.to_record() for t in teams]
    return json.dumps(records, ensure_ascii=False)


def save_teams(store: JsonFileStore, key: str, teams: Sequence[Team]) -> None:
    store.set_item(key, serialize_teams(teams))
