"""Tests for melee_moves.extract."""

from melee_moves.extract import classify_frame, extract_moves
from melee_moves.frames import FrameSnapshot
from melee_moves.records import PlayerInfo, PlayerMoveRecord

from .conftest import make_frames


def snap(state, buttons=0, airborne=None):
    return FrameSnapshot(frame_index=0, port=1, action_state=state, buttons=buttons, airborne=airborne)


# ---------------------------------------------------------------------------
# classify_frame
# ---------------------------------------------------------------------------

def test_falco_down_b_counts_down_b_and_shine():
    record = PlayerMoveRecord(port=1, character="Falco")
    assert classify_frame(snap(28), record) == ["down_b", "shine"]
    assert record.moves == {"down_b": 1, "shine": 1}


def test_falco_neutral_b_counts_laser():
    record = PlayerMoveRecord(port=1, character="Falco")
    classify_frame(snap(25), record)
    assert record.moves == {"neutral_b": 1, "laser": 1}


def test_fox_neutral_b_counts_only_neutral_b():
    record = PlayerMoveRecord(port=1, character="Fox")
    classify_frame(snap(25), record)
    assert record.moves == {"neutral_b": 1}


def test_unmatched_frame_is_a_no_op():
    record = PlayerMoveRecord(port=1, character="Fox", moves={"jab": 2})
    assert classify_frame(snap(0), record) == []
    assert classify_frame(snap(999), record) == []
    assert record.moves == {"jab": 2}


def test_technique_only_frame_leaves_base_moves_alone():
    record = PlayerMoveRecord(port=1, character="Fox", moves={"jab": 2})
    assert classify_frame(snap(39, airborne=0), record) == ["wavedash"]
    assert record.moves == {"jab": 2, "wavedash": 1}


def test_counts_accumulate_by_one():
    record = PlayerMoveRecord(port=1, character="Marth")
    for _ in range(3):
        classify_frame(snap(13), record)
    assert record.moves == {"nair": 3}


# ---------------------------------------------------------------------------
# extract_moves
# ---------------------------------------------------------------------------

def test_extract_moves_one_record_per_player(fox_falco):
    frames = [
        make_frames(1, [31, 13, 13, 28]),
        make_frames(2, [25, 25, 0, 14]),
    ]
    records = extract_moves(frames, fox_falco)
    assert [r.port for r in records] == [1, 2]
    assert records[0].moves == {"jump": 1, "nair": 2, "down_b": 1, "shine": 1}
    assert records[1].moves == {"neutral_b": 2, "laser": 2, "fair": 1}


def test_extract_moves_empty_game(fox_falco):
    records = extract_moves([make_frames(1, []), make_frames(2, [])], fox_falco)
    assert [r.moves for r in records] == [{}, {}]


def test_missing_frames_are_skipped(fox_falco):
    """A player with no data on some frames (e.g. after a disconnect) is skipped there."""
    frames = [
        make_frames(1, [13, None, None]),
        make_frames(2, [13, 13, 13]),
    ]
    records = extract_moves(frames, fox_falco)
    assert records[0].moves == {"nair": 1}
    assert records[1].moves == {"nair": 3}


def test_player_without_frame_data(fox_falco):
    records = extract_moves([make_frames(1, [18, 18]), None], fox_falco)
    assert records[0].moves == {"jab": 2}
    assert records[1].moves == {}
    assert records[1].character == "Falco"


def test_shorter_frame_array_is_padded_with_nothing(fox_falco):
    records = extract_moves([make_frames(1, [18]), make_frames(2, [18, 18, 18])], fox_falco)
    assert records[0].moves == {"jab": 1}
    assert records[1].moves == {"jab": 3}


def test_extra_frame_slots_are_ignored(fox_falco):
    frames = [make_frames(1, [18]), make_frames(2, [18]), make_frames(3, [18])]
    assert len(extract_moves(frames, fox_falco)) == 2


def test_wavedash_counted_every_qualifying_frame():
    """Three consecutive grounded air-dodge frames count three wavedashes."""
    players = [PlayerInfo(port=1, character="Marth", stocks=4, costume=0)]
    frames = [make_frames(1, [39, 39, 39, 39], airborne=[0, 0, 0, 1])]
    assert extract_moves(frames, players)[0].moves == {"wavedash": 3}


def test_l_cancel_from_button_mask():
    players = [PlayerInfo(port=1, character="Fox", stocks=4, costume=0)]
    frames = [make_frames(1, [13, 42, 42], buttons=[0, 0x40, 0])]
    assert extract_moves(frames, players)[0].moves == {"nair": 1, "l_cancel": 1}


def test_permuting_players_reassigns_counts(fox_falco):
    fox = make_frames(1, [28, 13, 31])
    falco = make_frames(2, [25, 25, 28])
    forward = extract_moves([fox, falco], fox_falco)
    reverse = extract_moves([falco, fox], list(reversed(fox_falco)))

    by_port_fwd = {r.port: r.moves for r in forward}
    by_port_rev = {r.port: r.moves for r in reverse}
    assert by_port_fwd == by_port_rev
    assert [r.port for r in reverse] == [2, 1]
