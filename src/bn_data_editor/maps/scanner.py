"""
Stateless scanning of a game's data/json tree.
"""

import logging
from pathlib import Path
from typing import Any, Iterator

import orjson

from ..game_data.models import GameDataObject

logger = logging.getLogger(__name__)


def game_json_path(game_path: str | Path) -> Path:
    return Path(game_path) / "data" / "json"


def iter_json_objects(data_path: Path) -> Iterator[GameDataObject]:
    """Yield every top-level JSON object of every file under `data_path`.

    Unreadable or malformed files are logged and skipped.
    """
    for json_file in sorted(data_path.rglob("*.json")):
        try:
            with json_file.open("rb") as f:
                data: Any = orjson.loads(f.read())
        except (OSError, orjson.JSONDecodeError) as e:
            logger.debug(f"Skipping {json_file}: {e}")
            continue

        items = data if isinstance(data, list) else [data]
        for item in items:
            if isinstance(item, dict):
                yield item
