"""Start/target word pairs for LinkUp puzzles.

Two pools, both read from ``linkup/inputs/puzzles.yaml``:
- Daily: one pair per calendar day, chosen by the date seed
- Practice: a random pair per game

Usage:
    loader = PuzzleLoader()
    pair = loader.get_daily_pair(daily_seed())
    pair = loader.get_practice_pair(seed=42)
"""

import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from linkup.errors import PuzzleLoaderError
from linkup.session import GameMode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WordPair:
    start: str
    end: str


class PuzzleLoader:
    """Load word pairs and pick one for a game."""

    def __init__(self, puzzles_file: Optional[str] = None):
        base_dir = Path(__file__).parent
        self.puzzles_file = Path(puzzles_file) if puzzles_file else base_dir / "inputs" / "puzzles.yaml"

        # Cached data
        self._pools: Optional[Dict[str, List[WordPair]]] = None

    def _load_pools(self) -> Dict[str, List[WordPair]]:
        """Load both pools from YAML (once)."""
        if self._pools is not None:
            return self._pools

        try:
            with open(self.puzzles_file, "r") as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError as e:
            raise PuzzleLoaderError(f"Puzzle file not found: {self.puzzles_file}") from e
        except yaml.YAMLError as e:
            raise PuzzleLoaderError(f"Could not parse {self.puzzles_file}: {e}") from e

        pools = {}
        for mode in GameMode:
            entries = data.get(mode.value) or []
            pairs = []
            for entry in entries:
                try:
                    pairs.append(WordPair(start=str(entry["start"]).strip(), end=str(entry["end"]).strip()))
                except (KeyError, TypeError) as e:
                    raise PuzzleLoaderError(f"Malformed {mode.value} pair in {self.puzzles_file}: {entry!r}") from e
            pools[mode.value] = pairs

        self._pools = pools
        logger.info(
            f"Loaded {len(pools[GameMode.DAILY.value])} daily and "
            f"{len(pools[GameMode.PRACTICE.value])} practice pairs from {self.puzzles_file}"
        )
        return self._pools

    def _pool(self, mode: GameMode) -> List[WordPair]:
        pairs = self._load_pools()[mode.value]
        if not pairs:
            raise PuzzleLoaderError(f"No {mode.value} pairs in {self.puzzles_file}")
        return pairs

    def get_daily_pair(self, seed: int) -> WordPair:
        """Same seed, same pair."""
        pairs = self._pool(GameMode.DAILY)
        return pairs[seed % len(pairs)]

    def get_practice_pair(self, seed: Optional[int] = None) -> WordPair:
        pairs = self._pool(GameMode.PRACTICE)
        rng = random.Random(seed) if seed is not None else random
        return rng.choice(pairs)

    def get_pair(self, mode: GameMode, seed: Optional[int] = None) -> WordPair:
        if mode == GameMode.DAILY:
            if seed is None:
                raise PuzzleLoaderError("Daily puzzles need a date seed")
            return self.get_daily_pair(seed)
        return self.get_practice_pair(seed)

    def get_pair_count(self, mode: GameMode) -> int:
        return len(self._load_pools()[mode.value])
