"""Per-frame, per-player input snapshots read from .slp replays.

The move classifier only needs three fields per frame: the pre-frame action
state, the pre-frame button mask and the post-frame airborne flag. They are
kept as numpy arrays per player (PlayerFrames) and turned into FrameSnapshot
objects one frame at a time.

Typical usage:
    from peppi_py import read_slippi
    from melee_moves.frames import read_player_frames

    game = read_slippi("game.slp")
    frames = read_player_frames(game, slot=0, port=1)
    frames.snapshot(0)  # FrameSnapshot(frame_index=0, port=1, ...)
"""

from dataclasses import dataclass

import numpy as np
import pandas as pd
import pyarrow as pa


@dataclass(frozen=True)
class FrameSnapshot:
    """One player's state on one frame."""

    frame_index: int
    port: int
    action_state: int
    buttons: int
    airborne: int | None = None  # None when the replay does not record it


def _arrow_to_numpy(arr: pa.Array | None) -> np.ndarray | None:
    """Convert a PyArrow array to numpy, handling nulls.

    Older Slippi formats leave some fields (e.g. airborne) as None; those come
    back as None instead of raising.
    """
    if arr is None:
        return None
    if arr.null_count == 0:
        return arr.to_numpy(zero_copy_only=False)
    # Nullable arrays go through pandas so nulls become NaN / None
    return arr.to_pandas().values


class PlayerFrames:
    """Frame-aligned input arrays for one player.

    Args:
        port: Controller port (1-4).
        state: Pre-frame action state per frame. NaN/None marks a frame with
            no data for this player.
        buttons: Pre-frame button bitmask per frame.
        airborne: Post-frame airborne flag per frame, or None if unknown for
            the whole game.
    """

    def __init__(self, port: int, state, buttons=None, airborne=None):
        self.port = port
        self.state = np.asarray(state, dtype=object if _has_missing(state) else None)
        if buttons is None:
            buttons = np.zeros(len(self.state), dtype=np.int64)
        self.buttons = np.asarray(buttons)
        self.airborne = None if airborne is None else np.asarray(airborne)

    def __len__(self) -> int:
        return len(self.state)

    def __repr__(self) -> str:
        return f"PlayerFrames(port={self.port}, frames={len(self)})"

    def snapshot(self, frame_index: int) -> FrameSnapshot | None:
        """Return the snapshot for ``frame_index`` or None if this player has no data there."""
        if frame_index < 0 or frame_index >= len(self.state):
            return None
        state = self.state[frame_index]
        if pd.isna(state):
            return None

        buttons = self.buttons[frame_index] if frame_index < len(self.buttons) else None
        buttons = 0 if buttons is None or pd.isna(buttons) else int(buttons)

        airborne = None
        if self.airborne is not None and frame_index < len(self.airborne):
            value = self.airborne[frame_index]
            if not pd.isna(value):
                airborne = int(value)

        return FrameSnapshot(
            frame_index=frame_index,
            port=self.port,
            action_state=int(state),
            buttons=buttons,
            airborne=airborne,
        )


def _has_missing(values) -> bool:
    if isinstance(values, np.ndarray) and values.dtype.kind in "iub":
        return False
    return any(v is None for v in values)


def read_player_frames(game, slot: int, port: int) -> PlayerFrames | None:
    """Read one player's classifier inputs from a peppi-py game.

    Args:
        game: A peppi-py game object from read_slippi().
        slot: Index into game.frames.ports (parallel to game.start.players).
        port: Controller port number (1-4) to stamp on the snapshots.

    Returns:
        PlayerFrames, or None if the replay has no frame data for the slot.
    """
    ports = game.frames.ports
    if slot >= len(ports):
        return None
    port_data = ports[slot]
    if port_data is None or port_data.leader is None:
        return None

    pre = port_data.leader.pre
    post = port_data.leader.post

    state = _arrow_to_numpy(pre.state)
    if state is None:
        return None

    return PlayerFrames(
        port=port,
        state=state,
        buttons=_arrow_to_numpy(pre.buttons),
        airborne=_arrow_to_numpy(getattr(post, "airborne", None)),
    )
