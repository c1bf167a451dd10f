"""Game records and aggregated statistics, with their JSON encoding.

A GameRecord is the unit written to disk after parsing one replay and read
back for aggregation. ``moves`` is None when move extraction was not run; an
empty list means it ran and nothing was counted. The two stay distinct in
JSON (``"moves": null`` vs ``"moves": []``).
"""

from dataclasses import dataclass, field
from typing import Any, Literal

from melee_moves.errors import RecordError


# ---------------------------------------------------------------------------
# Players and move counts
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PlayerInfo:
    port: int
    character: str
    stocks: int
    costume: int
    team: str | None = None

    def to_dict(self) -> dict:
        return {
            "port": self.port,
            "character": self.character,
            "stocks": self.stocks,
            "costume": self.costume,
            "team": self.team,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PlayerInfo":
        _require_mapping(data, "player")
        team = data.get("team")
        if team is not None and not isinstance(team, str):
            raise RecordError(f"player team must be a string or null, got {team!r}")
        return cls(
            port=_port(data),
            character=_string(data, "character"),
            stocks=_count(data, "stocks"),
            costume=_count(data, "costume"),
            team=team,
        )


@dataclass
class PlayerMoveRecord:
    """Move counts for one player in one game."""

    port: int
    character: str
    moves: dict[str, int] = field(default_factory=dict)

    @property
    def total_moves(self) -> int:
        return sum(self.moves.values())

    def increment(self, move: str) -> None:
        self.moves[move] = self.moves.get(move, 0) + 1

    def to_dict(self) -> dict:
        return {
            "port": self.port,
            "character": self.character,
            "moves": dict(self.moves),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PlayerMoveRecord":
        _require_mapping(data, "move record")
        moves = data.get("moves")
        if not isinstance(moves, dict):
            raise RecordError("move record 'moves' must be an object")
        counts = {}
        for name, count in moves.items():
            if not isinstance(count, int) or isinstance(count, bool) or count < 0:
                raise RecordError(f"move count for {name!r} must be a non-negative integer, got {count!r}")
            counts[str(name)] = count
        return cls(port=_port(data), character=_string(data, "character"), moves=counts)


# ---------------------------------------------------------------------------
# Game record
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GameRecord:
    player_count: int
    duration_frames: int
    stage: str
    players: list[PlayerInfo]
    moves: list[PlayerMoveRecord] | None = None

    @property
    def has_moves(self) -> bool:
        return self.moves is not None

    def to_dict(self) -> dict:
        return {
            "player_count": self.player_count,
            "duration_frames": self.duration_frames,
            "stage": self.stage,
            "players": [p.to_dict() for p in self.players],
            "moves": None if self.moves is None else [m.to_dict() for m in self.moves],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GameRecord":
        """Decode a stored record, raising RecordError on anything malformed."""
        _require_mapping(data, "game record")
        players_raw = data.get("players")
        if not isinstance(players_raw, list):
            raise RecordError("game record 'players' must be a list")
        players = [PlayerInfo.from_dict(p) for p in players_raw]
        known_ports = {p.port for p in players}
        if len(known_ports) != len(players):
            raise RecordError("game record has duplicate player ports")

        player_count = _count(data, "player_count")
        if player_count != len(players):
            raise RecordError(
                f"game record 'player_count' is {player_count} but lists {len(players)} players"
            )

        moves = None
        moves_raw = data.get("moves")
        if moves_raw is not None:
            if not isinstance(moves_raw, list):
                raise RecordError("game record 'moves' must be a list or null")
            moves = [PlayerMoveRecord.from_dict(m) for m in moves_raw]
            seen = set()
            for m in moves:
                if m.port not in known_ports:
                    raise RecordError(f"move record for port {m.port} has no matching player")
                if m.port in seen:
                    raise RecordError(f"duplicate move record for port {m.port}")
                seen.add(m.port)

        return cls(
            player_count=player_count,
            duration_frames=_count(data, "duration_frames"),
            stage=_string(data, "stage"),
            players=players,
            moves=moves,
        )


# ---------------------------------------------------------------------------
# Aggregated statistics
# ---------------------------------------------------------------------------

MOST_COMMON_MOVE = "most_common_move"
AVERAGE_MOVES_PER_GAME = "average_moves_per_game"


@dataclass(frozen=True)
class SummaryValue:
    """A named summary statistic: either text or an integer."""

    kind: Literal["text", "integer"]
    value: str | int

    @classmethod
    def text(cls, value: str) -> "SummaryValue":
        return cls("text", str(value))

    @classmethod
    def integer(cls, value: int) -> "SummaryValue":
        return cls("integer", int(value))

    def to_json(self) -> str | int:
        return self.value


@dataclass
class AggregatedStats:
    total_games: int
    players: list[PlayerMoveRecord]
    aggregated_stats: dict[str, SummaryValue]

    @property
    def most_common_move(self) -> str | None:
        value = self.aggregated_stats.get(MOST_COMMON_MOVE)
        return None if value is None else value.value

    @property
    def average_moves_per_game(self) -> int:
        value = self.aggregated_stats.get(AVERAGE_MOVES_PER_GAME)
        return 0 if value is None else value.value

    def to_dict(self) -> dict:
        return {
            "total_games": self.total_games,
            "players": [p.to_dict() for p in self.players],
            "aggregated_stats": {k: v.to_json() for k, v in self.aggregated_stats.items()},
        }


# ---------------------------------------------------------------------------
# Field validation helpers
# ---------------------------------------------------------------------------

def _require_mapping(data: Any, what: str) -> None:
    if not isinstance(data, dict):
        raise RecordError(f"{what} must be an object, got {type(data).__name__}")


def _count(data: dict, key: str) -> int:
    if key not in data:
        raise RecordError(f"missing field {key!r}")
    value = data[key]
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise RecordError(f"field {key!r} must be a non-negative integer, got {value!r}")
    return value


def _port(data: dict) -> int:
    port = _count(data, "port")
    if not 1 <= port <= 4:
        raise RecordError(f"port must be between 1 and 4, got {port}")
    return port


def _string(data: dict, key: str) -> str:
    if key not in data:
        raise RecordError(f"missing field {key!r}")
    value = data[key]
    if not isinstance(value, str):
        raise RecordError(f"field {key!r} must be a string, got {value!r}")
    return value
