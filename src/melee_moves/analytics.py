"""DataFrame views over stored GameRecords and aggregated move statistics.

Typical usage:
    from melee_moves.parse import iter_records
    from melee_moves.analytics import player_games, character_usage, matchups

    records = list(iter_records("parsed"))
    pg = player_games(records)
    character_usage(records)
    matchups(records, limit=10)
"""

from collections.abc import Iterable

import pandas as pd

from melee_moves.records import AggregatedStats, GameRecord

FPS = 60


def games_frame(records: Iterable[GameRecord]) -> pd.DataFrame:
    """One row per game.

    Columns returned:
        game, stage, player_count, duration_frames, duration_seconds, has_moves
    """
    rows = []
    for i, record in enumerate(records):
        rows.append({
            "game": i,
            "stage": record.stage,
            "player_count": record.player_count,
            "duration_frames": record.duration_frames,
            "duration_seconds": round(record.duration_frames / FPS, 2),
            "has_moves": record.has_moves,
        })
    return pd.DataFrame(rows, columns=[
        "game", "stage", "player_count", "duration_frames", "duration_seconds", "has_moves",
    ])


def player_games(records: Iterable[GameRecord]) -> pd.DataFrame:
    """Unpivot GameRecords into one row per player-game.

    Columns returned:
        game, stage, duration_frames, port, character, stocks, costume, team,
        total_moves (NaN when moves were not extracted),
        opp_character (1v1 only, None otherwise)
    """
    rows = []
    for i, record in enumerate(records):
        totals = {}
        if record.moves is not None:
            totals = {m.port: m.total_moves for m in record.moves}

        for player in record.players:
            entry = {
                "game": i,
                "stage": record.stage,
                "duration_frames": record.duration_frames,
                "port": player.port,
                "character": player.character,
                "stocks": player.stocks,
                "costume": player.costume,
                "team": player.team,
                "total_moves": totals.get(player.port),
                "opp_character": None,
            }
            # Opponent info for 1v1s
            if len(record.players) == 2:
                opp = next(p for p in record.players if p is not player)
                entry["opp_character"] = opp.character
            rows.append(entry)

    return pd.DataFrame(rows, columns=[
        "game", "stage", "duration_frames", "port", "character", "stocks",
        "costume", "team", "total_moves", "opp_character",
    ])


def character_usage(records: Iterable[GameRecord]) -> pd.DataFrame:
    """Games played per character and share of all player-games, most played first."""
    pg = player_games(records)
    if pg.empty:
        return pd.DataFrame(columns=["character", "games_played", "usage_percentage"])
    usage = (
        pg.groupby("character").size().rename("games_played").reset_index()
        .sort_values(["games_played", "character"], ascending=[False, True])
        .reset_index(drop=True)
    )
    usage["usage_percentage"] = (usage["games_played"] * 100.0 / usage["games_played"].sum()).round(2)
    return usage


def stage_popularity(records: Iterable[GameRecord]) -> pd.DataFrame:
    """Games and average length per stage, most played first."""
    games = games_frame(records)
    if games.empty:
        return pd.DataFrame(columns=["stage", "games_played", "avg_duration", "stage_percentage"])
    stages = (
        games.groupby("stage")
        .agg(games_played=("game", "count"), avg_duration=("duration_frames", "mean"))
        .reset_index()
        .sort_values(["games_played", "stage"], ascending=[False, True])
        .reset_index(drop=True)
    )
    stages["avg_duration"] = stages["avg_duration"].round(1)
    stages["stage_percentage"] = (stages["games_played"] * 100.0 / stages["games_played"].sum()).round(2)
    return stages


def matchups(records: Iterable[GameRecord], limit: int | None = 20) -> pd.DataFrame:
    """Count character pairings, each pair of players in a game counted once (lower port first)."""
    rows = []
    for record in records:
        players = sorted(record.players, key=lambda p: p.port)
        for a in range(len(players)):
            for b in range(a + 1, len(players)):
                rows.append({"char1": players[a].character, "char2": players[b].character})

    if not rows:
        return pd.DataFrame(columns=["char1", "char2", "matchup_count"])

    counts = (
        pd.DataFrame(rows).groupby(["char1", "char2"]).size()
        .rename("matchup_count").reset_index()
        .sort_values(["matchup_count", "char1", "char2"], ascending=[False, True, True])
        .reset_index(drop=True)
    )
    if limit is not None:
        counts = counts.head(limit)
    return counts


def move_totals(stats: AggregatedStats) -> pd.DataFrame:
    """Total count per move across all players, most used first."""
    rows = [
        {"move": name, "count": count}
        for player in stats.players
        for name, count in player.moves.items()
    ]
    if not rows:
        return pd.DataFrame(columns=["move", "count"])
    totals = pd.DataFrame(rows).groupby("move", sort=True)["count"].sum().reset_index()
    return totals.sort_values("count", ascending=False, kind="stable").reset_index(drop=True)


def character_moves(stats: AggregatedStats) -> pd.DataFrame:
    """Character x move table of summed counts (0 where a character never used a move)."""
    rows = [
        {"character": player.character, "move": name, "count": count}
        for player in stats.players
        for name, count in player.moves.items()
    ]
    if not rows:
        return pd.DataFrame()
    return pd.DataFrame(rows).pivot_table(
        index="character", columns="move", values="count", aggfunc="sum", fill_value=0,
    )
