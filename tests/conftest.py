"""Shared pytest fixtures for melee-moves tests."""

import json
from types import SimpleNamespace

import pyarrow as pa
import pytest

from melee_moves.frames import PlayerFrames
from melee_moves.parse import save_record
from melee_moves.records import GameRecord, PlayerInfo, PlayerMoveRecord

FOX = 2
FALCO = 20
MARTH = 9
BATTLEFIELD = 31


def make_frames(port: int, states, buttons=None, airborne=None) -> PlayerFrames:
    """PlayerFrames from plain lists (None in ``states`` = no data that frame)."""
    return PlayerFrames(port=port, state=states, buttons=buttons, airborne=airborne)


def make_record(moves: list[dict] | None, stage: str = "Battlefield", characters=("Fox", "Falco")) -> GameRecord:
    """GameRecord whose players match ``characters``; ``moves`` holds one dict per player or None."""
    players = [
        PlayerInfo(port=i + 1, character=c, stocks=4, costume=0)
        for i, c in enumerate(characters)
    ]
    move_records = None
    if moves is not None:
        move_records = [
            PlayerMoveRecord(port=players[i].port, character=players[i].character, moves=dict(m))
            for i, m in enumerate(moves)
        ]
    return GameRecord(
        player_count=len(players),
        duration_frames=3600,
        stage=stage,
        players=players,
        moves=move_records,
    )


def make_peppi_game(port_frames, characters=(FOX, FALCO), stage=BATTLEFIELD, teams=None):
    """Stand-in for a peppi-py game object built from pyarrow arrays.

    ``port_frames`` is a list of (states, buttons, airborne) tuples, one per player.
    """
    teams = teams or [None] * len(characters)
    players = tuple(
        SimpleNamespace(
            port=SimpleNamespace(value=i),
            character=char,
            stocks=4,
            costume=i,
            team=None if team is None else SimpleNamespace(color=team),
        )
        for i, (char, team) in enumerate(zip(characters, teams))
    )
    n_frames = max(len(states) for states, _, _ in port_frames)
    ports = tuple(
        SimpleNamespace(leader=SimpleNamespace(
            pre=SimpleNamespace(state=pa.array(states), buttons=pa.array(buttons)),
            post=SimpleNamespace(airborne=None if airborne is None else pa.array(airborne)),
        ))
        for states, buttons, airborne in port_frames
    )
    return SimpleNamespace(
        start=SimpleNamespace(stage=stage, players=players),
        frames=SimpleNamespace(id=pa.array(list(range(-123, n_frames - 123))), ports=ports),
    )


@pytest.fixture
def fox_falco():
    """Fox on port 1, Falco on port 2."""
    return [
        PlayerInfo(port=1, character="Fox", stocks=4, costume=0),
        PlayerInfo(port=2, character="Falco", stocks=4, costume=1),
    ]


@pytest.fixture
def peppi_game():
    """Fox (jump, nair, shine) vs Falco (laser x2, wavedash) over 4 frames."""
    return make_peppi_game([
        ([31, 13, 28, 14], [0, 0, 0, 0], [False, True, False, False]),
        ([25, 25, 39, 0], [0, 0, 0, 0], [False, True, False, False]),
    ])


@pytest.fixture
def record_dir(tmp_path):
    """Directory with two good records, one record without moves, and two broken files."""
    save_record(make_record([{"nair": 10, "fair": 5}, {"laser": 20}]), tmp_path / "a_game.json")
    save_record(make_record([{"jab": 3}, {"laser": 1, "shine": 2}]), tmp_path / "b_game.json")
    save_record(make_record(None), tmp_path / "c_no_moves.json")
    (tmp_path / "d_broken.json").write_text("{not json")
    bad = make_record([{"nair": 1}, {}]).to_dict()
    bad["moves"][0]["moves"]["nair"] = -4
    (tmp_path / "e_negative.json").write_text(json.dumps(bad))
    (tmp_path / "notes.txt").write_text("ignored")
    return tmp_path
