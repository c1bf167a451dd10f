"""Tests for melee_moves.records."""

import pytest

from melee_moves.errors import RecordError
from melee_moves.records import (
    AggregatedStats,
    GameRecord,
    PlayerMoveRecord,
    SummaryValue,
)

from .conftest import make_record


def test_moves_none_and_empty_stay_distinct():
    """Absent moves encode as null, an empty move list as []."""
    none_dict = make_record(None).to_dict()
    empty_dict = GameRecord(player_count=0, duration_frames=0, stage="Battlefield", players=[], moves=[]).to_dict()

    assert none_dict["moves"] is None
    assert empty_dict["moves"] == []
    assert GameRecord.from_dict(none_dict).moves is None
    assert GameRecord.from_dict(empty_dict).moves == []


def test_missing_moves_key_means_no_moves():
    data = make_record(None).to_dict()
    del data["moves"]
    assert GameRecord.from_dict(data).has_moves is False


def test_to_dict_field_order():
    data = make_record([{"jab": 1}, {}]).to_dict()
    assert list(data) == ["player_count", "duration_frames", "stage", "players", "moves"]
    assert list(data["players"][0]) == ["port", "character", "stocks", "costume", "team"]
    assert list(data["moves"][0]) == ["port", "character", "moves"]


def test_from_dict_keeps_move_order():
    data = make_record([{"uair": 1, "jab": 2, "fair": 3}, {}]).to_dict()
    record = GameRecord.from_dict(data)
    assert list(record.moves[0].moves) == ["uair", "jab", "fair"]


@pytest.mark.parametrize("mutate", [
    lambda d: d.pop("stage"),
    lambda d: d.update(duration_frames="long"),
    lambda d: d.update(players="nobody"),
    lambda d: d["players"][0].update(port=7),
    lambda d: d["players"][0].update(stocks=-1),
    lambda d: d["moves"][0]["moves"].update(nair=-1),
    lambda d: d["moves"][0]["moves"].update(nair=1.5),
    lambda d: d["moves"][0]["moves"].update(nair=True),
    lambda d: d["moves"][0].update(moves=[1, 2]),
    lambda d: d.update(moves={"port": 1}),
])
def test_malformed_records_raise(mutate):
    data = make_record([{"nair": 1}, {"fair": 2}]).to_dict()
    mutate(data)
    with pytest.raises(RecordError):
        GameRecord.from_dict(data)


def test_move_port_must_match_a_player():
    data = make_record([{"nair": 1}, {}]).to_dict()
    data["moves"][1]["port"] = 3
    with pytest.raises(RecordError, match="port 3"):
        GameRecord.from_dict(data)


@pytest.mark.parametrize("mutate, message", [
    (lambda d: d["players"][1].update(port=1), "duplicate player ports"),
    (lambda d: d["moves"][1].update(port=1), "duplicate move record"),
    (lambda d: d.update(player_count=3), "player_count"),
])
def test_inconsistent_records_raise(mutate, message):
    data = make_record([{"nair": 1}, {"fair": 2}]).to_dict()
    mutate(data)
    with pytest.raises(RecordError, match=message):
        GameRecord.from_dict(data)


def test_non_object_record_raises():
    with pytest.raises(RecordError):
        GameRecord.from_dict([1, 2, 3])


def test_player_move_record_total():
    record = PlayerMoveRecord(port=1, character="Fox", moves={"nair": 10, "shine": 5})
    assert record.total_moves == 15
    record.increment("nair")
    record.increment("jab")
    assert record.moves == {"nair": 11, "shine": 5, "jab": 1}


def test_summary_values_are_tagged():
    text = SummaryValue.text("laser")
    number = SummaryValue.integer(35)
    assert (text.kind, text.value) == ("text", "laser")
    assert (number.kind, number.value) == ("integer", 35)


def test_aggregated_stats_accessors():
    stats = AggregatedStats(total_games=0, players=[], aggregated_stats={})
    assert stats.most_common_move is None
    assert stats.average_moves_per_game == 0
