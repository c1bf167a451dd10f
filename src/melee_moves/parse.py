"""Parse .slp replays into GameRecords and read/write the JSON record store.

One replay becomes one JSON file holding a GameRecord. Aggregation later reads
a directory of those files back.

Typical usage:
    from melee_moves.parse import parse_game, parse_directory, iter_records

    record = parse_game("game.slp", extract_moves=True)
    summary = parse_directory("replays", "parsed", workers=4)
    for record in iter_records("parsed"):
        ...
"""

import concurrent.futures
import json
import logging
from collections.abc import Iterator
from pathlib import Path

from peppi_py import read_slippi

from melee_moves.enums import character_name, stage_name, team_name
from melee_moves.errors import RecordError, ReplayDecodeError
from melee_moves.extract import extract_moves as _extract_moves
from melee_moves.frames import read_player_frames
from melee_moves.records import GameRecord, PlayerInfo

logger = logging.getLogger(__name__)

REPLAY_SUFFIX = ".slp"
RECORD_SUFFIX = ".json"


# ---------------------------------------------------------------------------
# Replay -> GameRecord
# ---------------------------------------------------------------------------

def _port_number(player) -> int:
    # peppi-py ports are 0-based (P1 = 0)
    port = player.port.value if hasattr(player.port, "value") else player.port
    return int(port) + 1


def game_record(game, extract_moves: bool = False) -> GameRecord:
    """Build a GameRecord from an already-decoded peppi-py game.

    Args:
        game: A peppi-py game object from read_slippi().
        extract_moves: If True, run move extraction over every frame.

    Returns:
        GameRecord; ``moves`` is None unless extract_moves is True.
    """
    active_players = [(i, p) for i, p in enumerate(game.start.players) if p is not None]

    players = []
    for _slot, player in active_players:
        players.append(PlayerInfo(
            port=_port_number(player),
            character=character_name(player.character),
            stocks=int(player.stocks),
            costume=int(player.costume),
            team=team_name(player.team.color) if player.team else None,
        ))

    frames = game.frames
    duration = len(frames.id) if frames is not None else 0

    moves = None
    if extract_moves:
        logger.info("Extracting moves from %d frames", duration)
        player_frames = (
            [read_player_frames(game, slot, info.port) for (slot, _), info in zip(active_players, players)]
            if frames is not None else []
        )
        moves = _extract_moves(player_frames, players)

    return GameRecord(
        player_count=len(players),
        duration_frames=duration,
        stage=stage_name(game.start.stage),
        players=players,
        moves=moves,
    )


def parse_game(filepath: str | Path, extract_moves: bool = False) -> GameRecord:
    """Decode a single .slp file into a GameRecord.

    Raises:
        ReplayDecodeError: if peppi-py cannot read the replay, or the decoded
            game is missing data a GameRecord needs.
    """
    filepath = Path(filepath)
    logger.info("Reading replay %s", filepath)
    try:
        game = read_slippi(str(filepath))
    except Exception as e:
        raise ReplayDecodeError(f"could not decode {filepath}: {e}") from e

    try:
        record = game_record(game, extract_moves=extract_moves)
    except Exception as e:
        raise ReplayDecodeError(f"could not read game data from {filepath}: {e}") from e
    logger.info(
        "Parsed %s: %d players, %d frames",
        filepath.name, record.player_count, record.duration_frames,
    )
    return record


# ---------------------------------------------------------------------------
# Record store
# ---------------------------------------------------------------------------

def save_record(record: GameRecord, path: str | Path) -> Path:
    """Write a GameRecord as pretty-printed JSON, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(record.to_dict(), indent=2))
    return path


def load_record(path: str | Path) -> GameRecord:
    """Read one stored GameRecord.

    Raises:
        RecordError: if the file cannot be read, is not JSON, or does not
            describe a valid GameRecord.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text())
    except (OSError, ValueError, RecursionError) as e:
        # ValueError covers JSONDecodeError and UnicodeDecodeError
        raise RecordError(str(e), source=path.name) from e
    try:
        return GameRecord.from_dict(data)
    except RecordError as e:
        raise RecordError(str(e), source=path.name) from e


def record_paths(directory: str | Path) -> list[Path]:
    """Record files directly inside ``directory``, in sorted order."""
    return sorted(p for p in Path(directory).glob(f"*{RECORD_SUFFIX}") if p.is_file())


def iter_records(
    directory: str | Path | None = None,
    errors: list[dict] | None = None,
    paths: list[Path] | None = None,
) -> Iterator[GameRecord]:
    """Yield every readable GameRecord, skipping files that fail to load.

    Args:
        directory: Directory of record files (ignored if ``paths`` is given).
        errors: Optional list; a ``{"filename", "error"}`` dict is appended
            for each file that was skipped.
        paths: Explicit record files to read, in order.
    """
    if paths is None:
        paths = record_paths(directory)
    for path in paths:
        try:
            record = load_record(path)
        except RecordError as e:
            logger.warning("Skipping %s: %s", path.name, e)
            if errors is not None:
                errors.append({"filename": path.name, "error": str(e)})
            continue
        yield record


# ---------------------------------------------------------------------------
# Batch parsing
# ---------------------------------------------------------------------------

def _parse_to_file(src: Path, dst: Path, extract_moves: bool) -> Path:
    return save_record(parse_game(src, extract_moves=extract_moves), dst)


def parse_directory(
    root: str | Path,
    output_dir: str | Path,
    extract_moves: bool = True,
    workers: int = 1,
) -> dict:
    """Recursively parse every .slp file under ``root`` into record files.

    Output files mirror the relative path of each replay, with a .json
    suffix. Any replay that fails to decode or convert is logged and skipped.

    Args:
        root: Root directory to search (walks subdirectories).
        output_dir: Directory that receives the record files.
        extract_moves: If True, include move counts in each record.
        workers: Number of worker processes (1 = parse in this process).

    Returns:
        Dict with keys ``processed`` (list of written paths) and ``errors``
        (list of ``{"filename", "error"}`` dicts).
    """
    root = Path(root)
    output_dir = Path(output_dir)

    jobs = [
        (src, (output_dir / src.relative_to(root)).with_suffix(RECORD_SUFFIX))
        for src in sorted(root.rglob(f"*{REPLAY_SUFFIX}"))
    ]
    logger.info("Found %d replay(s) under %s", len(jobs), root)

    processed = []
    errors = []
    if workers <= 1:
        for src, dst in jobs:
            try:
                processed.append(_parse_to_file(src, dst, extract_moves))
            except Exception as e:
                errors.append({"filename": src.name, "error": str(e)})
    else:
        with concurrent.futures.ProcessPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(_parse_to_file, src, dst, extract_moves): src
                for src, dst in jobs
            }
            for future in concurrent.futures.as_completed(futures):
                src = futures[future]
                if future.exception() is not None:
                    errors.append({"filename": src.name, "error": str(future.exception())})
                    continue
                processed.append(future.result())
        processed.sort()
        errors.sort(key=lambda err: err["filename"])

    if errors:
        logger.warning("%d file(s) failed to parse", len(errors))
        for err in errors:
            logger.warning("  %s: %s", err["filename"], err["error"])

    return {"processed": processed, "errors": errors}
