"""Merge per-game move records into cross-game statistics.

MoveAccumulator is a partial aggregate: records are folded into it one at a
time, and two accumulators can be merged. Summing counts is order
independent, so directory aggregation can fold chunks of files in worker
processes and merge the partial results in the parent.

Typical usage:
    from melee_moves.aggregate import aggregate_directory

    result = aggregate_directory("parsed")
    result.stats.most_common_move        # "jump"
    result.stats.average_moves_per_game  # 1843
    result.errors                        # [{"filename": ..., "error": ...}]
"""

import concurrent.futures
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from melee_moves.parse import iter_records, record_paths
from melee_moves.records import (
    AVERAGE_MOVES_PER_GAME,
    MOST_COMMON_MOVE,
    AggregatedStats,
    GameRecord,
    PlayerMoveRecord,
    SummaryValue,
)

logger = logging.getLogger(__name__)


class MoveAccumulator:
    """Running totals across games."""

    def __init__(self):
        self.total_games = 0
        self.skipped_games = 0
        self.players: list[PlayerMoveRecord] = []
        self.move_totals: dict[str, int] = {}

    def __repr__(self) -> str:
        return (
            f"MoveAccumulator(total_games={self.total_games}, "
            f"players={len(self.players)}, moves={len(self.move_totals)})"
        )

    def add(self, record: GameRecord) -> bool:
        """Fold one game in. Returns False (and counts nothing) if it has no move data."""
        if record.moves is None:
            self.skipped_games += 1
            return False

        self.total_games += 1
        for player_moves in record.moves:
            for name, count in player_moves.moves.items():
                self.move_totals[name] = self.move_totals.get(name, 0) + count
            self.players.append(player_moves)
        return True

    def merge(self, other: "MoveAccumulator") -> "MoveAccumulator":
        """Combine two partial aggregates into a new one (self first, then other)."""
        merged = MoveAccumulator()
        merged.total_games = self.total_games + other.total_games
        merged.skipped_games = self.skipped_games + other.skipped_games
        merged.players = self.players + other.players
        merged.move_totals = dict(self.move_totals)
        for name, count in other.move_totals.items():
            merged.move_totals[name] = merged.move_totals.get(name, 0) + count
        return merged

    @property
    def total_moves(self) -> int:
        return sum(self.move_totals.values())

    def most_common_move(self) -> str | None:
        """Move with the highest total; ties go to the alphabetically first name."""
        best = None
        best_count = -1
        for name in sorted(self.move_totals):
            if self.move_totals[name] > best_count:
                best, best_count = name, self.move_totals[name]
        return best

    def result(self) -> AggregatedStats:
        summary = {}
        most_common = self.most_common_move()
        if most_common is not None:
            summary[MOST_COMMON_MOVE] = SummaryValue.text(most_common)
        average = self.total_moves // self.total_games if self.total_games > 0 else 0
        summary[AVERAGE_MOVES_PER_GAME] = SummaryValue.integer(average)

        return AggregatedStats(
            total_games=self.total_games,
            players=list(self.players),
            aggregated_stats=summary,
        )


def aggregate_records(records: Iterable[GameRecord]) -> AggregatedStats:
    """Fold GameRecords into AggregatedStats. Records without move data are skipped."""
    acc = MoveAccumulator()
    for record in records:
        acc.add(record)
    return acc.result()


# ---------------------------------------------------------------------------
# Directory aggregation
# ---------------------------------------------------------------------------

@dataclass
class AggregationResult:
    stats: AggregatedStats
    errors: list[dict] = field(default_factory=list)
    skipped_games: int = 0


def _fold_paths(paths: list[Path]) -> tuple[MoveAccumulator, list[dict]]:
    errors: list[dict] = []
    acc = MoveAccumulator()
    for record in iter_records(paths=paths, errors=errors):
        acc.add(record)
    return acc, errors


def _chunks(items: list, n: int) -> list[list]:
    size = max(1, -(-len(items) // n))
    return [items[i:i + size] for i in range(0, len(items), size)]


def aggregate_directory(directory: str | Path, workers: int = 1) -> AggregationResult:
    """Aggregate every record file in ``directory``.

    Files that cannot be read or decoded are logged, listed in
    ``AggregationResult.errors`` and left out of every total.

    Args:
        directory: Directory containing one JSON GameRecord per file.
        workers: Number of worker processes. Files are split into contiguous
            chunks and the partial totals merged in chunk order.
    """
    directory = Path(directory)
    paths = record_paths(directory)
    logger.info("Aggregating %d record file(s) from %s", len(paths), directory)

    if workers <= 1 or len(paths) <= 1:
        acc, errors = _fold_paths(paths)
    else:
        acc = MoveAccumulator()
        errors = []
        with concurrent.futures.ProcessPoolExecutor(max_workers=workers) as executor:
            # map() keeps chunk order, so the merge is deterministic
            for partial, partial_errors in executor.map(_fold_paths, _chunks(paths, workers)):
                acc = acc.merge(partial)
                errors.extend(partial_errors)

    if errors:
        logger.warning("%d file(s) failed to parse", len(errors))
    logger.info(
        "Aggregated %d game(s), skipped %d without move data",
        acc.total_games, acc.skipped_games,
    )
    return AggregationResult(stats=acc.result(), errors=errors, skipped_games=acc.skipped_games)
