"""Classify frames into moves and count them per player for one game.

classify_frame() handles one snapshot for one player; extract_moves() walks a
whole game forward once, frame by frame, and returns one PlayerMoveRecord per
player in the order the players were given.

Typical usage:
    from melee_moves.extract import extract_moves

    records = extract_moves([p1_frames, p2_frames], players)
    records[0].moves  # {"jump": 31, "nair": 12, ...}
"""

from collections.abc import Sequence

from melee_moves.frames import FrameSnapshot, PlayerFrames
from melee_moves.moves import move_name
from melee_moves.records import PlayerInfo, PlayerMoveRecord
from melee_moves.techniques import detect_techniques


def classify_frame(snapshot: FrameSnapshot, record: PlayerMoveRecord) -> list[str]:
    """Count every move this snapshot matches against ``record``.

    The base move (if the action state is in the catalog) is counted first,
    then every matching technique. Only ``record.moves`` is modified.

    Returns:
        The move names that were incremented, in increment order.
    """
    matched = []
    base = move_name(snapshot.action_state)
    if base is not None:
        matched.append(base)
    matched.extend(detect_techniques(snapshot, record.character))

    for name in matched:
        record.increment(name)
    return matched


def extract_moves(
    player_frames: Sequence[PlayerFrames | None],
    players: Sequence[PlayerInfo],
) -> list[PlayerMoveRecord]:
    """Count moves for every player across every frame of one game.

    Args:
        player_frames: Frame data per player slot, parallel to ``players``.
            A None entry (or a frame with no data) is skipped.
        players: Players in slot order.

    Returns:
        One PlayerMoveRecord per player, same order as ``players``.
    """
    records = [PlayerMoveRecord(port=p.port, character=p.character) for p in players]
    slots = list(zip(player_frames, records))
    duration = max((len(pf) for pf, _ in slots if pf is not None), default=0)

    for frame_index in range(duration):
        for frames, record in slots:
            if frames is None:
                continue
            snapshot = frames.snapshot(frame_index)
            if snapshot is None:
                continue
            classify_frame(snapshot, record)

    return records
