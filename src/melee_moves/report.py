"""Render GameRecords and AggregatedStats as JSON, CSV or plain text.

Typical usage:
    from melee_moves.report import OutputFormat, render

    fmt = OutputFormat.parse("csv")
    print(render(stats, fmt))
"""

import enum
import json

import pandas as pd

from melee_moves.errors import UnsupportedFormatError
from melee_moves.records import AggregatedStats, GameRecord, PlayerMoveRecord

FPS = 60
TOP_MOVES = 5
CSV_COLUMNS = ["port", "character", "move", "count"]


class OutputFormat(enum.Enum):
    STRUCTURED = "json"
    TABULAR = "csv"
    NARRATIVE = "text"

    @classmethod
    def parse(cls, name: "str | OutputFormat") -> "OutputFormat":
        """Resolve a format selector ("json", "csv", "text" or the long names)."""
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower()
        for fmt in cls:
            if key in (fmt.value, fmt.name.lower()):
                return fmt
        choices = ", ".join(f.value for f in cls)
        raise UnsupportedFormatError(f"Unknown format: {name!r} (expected one of {choices})")


# ---------------------------------------------------------------------------
# Tabular
# ---------------------------------------------------------------------------

def moves_frame(players: list[PlayerMoveRecord]) -> pd.DataFrame:
    """One row per (port, character, move, count), in player then mapping order."""
    rows = [
        {"port": p.port, "character": p.character, "move": name, "count": count}
        for p in players
        for name, count in p.moves.items()
    ]
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def _to_csv(players: list[PlayerMoveRecord]) -> str:
    return moves_frame(players).to_csv(index=False, lineterminator="\n")


# ---------------------------------------------------------------------------
# Narrative
# ---------------------------------------------------------------------------

def top_moves(moves: dict[str, int], n: int = TOP_MOVES) -> list[tuple[str, int]]:
    """The ``n`` most used moves, count descending. Ties keep mapping order."""
    return sorted(moves.items(), key=lambda item: item[1], reverse=True)[:n]


def _player_breakdown(players: list[PlayerMoveRecord]) -> list[str]:
    lines = ["Player breakdown:"]
    for player in players:
        lines.append(f"Port {player.port}: {player.character} - {player.total_moves} total moves")
        for i, (name, count) in enumerate(top_moves(player.moves), start=1):
            lines.append(f"  {i}. {name}: {count}")
        lines.append("")
    return lines


def _stats_text(stats: AggregatedStats) -> str:
    lines = [
        "Move Statistics Summary",
        "======================",
        f"Total games processed: {stats.total_games}",
        f"Total players analyzed: {len(stats.players)}",
        "",
        f"Most common move: {stats.most_common_move or 'none'}",
        f"Average moves per game: {stats.average_moves_per_game}",
        "",
    ]
    lines.extend(_player_breakdown(stats.players))
    return "\n".join(lines)


def _game_text(record: GameRecord) -> str:
    seconds = round(record.duration_frames / FPS, 2)
    lines = [
        "Game Data",
        "=========",
        f"Players: {record.player_count}",
        f"Duration: {record.duration_frames} frames ({seconds} s)",
        f"Stage: {record.stage}",
        "",
    ]
    for p in record.players:
        team = f", team {p.team}" if p.team else ""
        lines.append(f"Port {p.port}: {p.character} ({p.stocks} stocks, costume {p.costume}{team})")
    lines.append("")

    if record.moves is None:
        lines.append("Move data not extracted")
    else:
        lines.append(f"Move data extracted for {len(record.moves)} players")
        lines.append("")
        lines.extend(_player_breakdown(record.moves))
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def render(value: GameRecord | AggregatedStats, fmt: "str | OutputFormat") -> str:
    """Render a single game or aggregated stats in the requested format.

    Raises:
        UnsupportedFormatError: for an unknown format selector.
        TypeError: if ``value`` is neither a GameRecord nor AggregatedStats.
    """
    fmt = OutputFormat.parse(fmt)
    if not isinstance(value, (GameRecord, AggregatedStats)):
        raise TypeError(f"cannot render {type(value).__name__}")

    if fmt is OutputFormat.STRUCTURED:
        return json.dumps(value.to_dict(), indent=2)

    if fmt is OutputFormat.TABULAR:
        players = value.players if isinstance(value, AggregatedStats) else (value.moves or [])
        return _to_csv(players)

    if isinstance(value, AggregatedStats):
        return _stats_text(value)
    return _game_text(value)
