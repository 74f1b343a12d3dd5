from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any

from playres.roster.players import ROSTER_KEYS, Player, Rosters
from playres.state import GameState

logger = logging.getLogger(__name__)

GAMESTATE_DOC = "gamestate.json"


def _write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(payload, f, indent=2)


class GameStore:
    """JSON documents for one session: gamestate.json plus rosters/<key>.json."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    @property
    def gamestate_path(self) -> Path:
        return self.root / GAMESTATE_DOC

    def roster_path(self, key: str) -> Path:
        return self.root / "rosters" / f"{key}.json"

    def load_state(self) -> GameState:
        try:
            with open(self.gamestate_path, "r") as f:
                raw = json.load(f)
        except FileNotFoundError:
            logger.info("no saved game state at %s, starting fresh", self.gamestate_path)
            return GameState()
        return GameState.from_dict(raw)

    def save_state(self, s: GameState) -> None:
        _write_json(self.gamestate_path, s.to_dict())

    def load_rosters(self) -> Rosters:
        squads: dict[str, list[Player]] = {}
        for key in ROSTER_KEYS:
            path = self.roster_path(key)
            if not path.exists():
                logger.warning("roster %s missing, using an empty squad", path)
                squads[key] = []
                continue
            with open(path, "r") as f:
                squads[key] = [Player.model_validate(p) for p in json.load(f)]
        return Rosters.model_validate(squads)

    def save_rosters(self, rosters: Rosters) -> None:
        for key in ROSTER_KEYS:
            players = [p.model_dump(by_alias=True, mode="json") for p in rosters.squad(key)]
            _write_json(self.roster_path(key), players)
