"""Melee replay move counting and move statistics."""

from melee_moves.aggregate import (
    AggregationResult,
    MoveAccumulator,
    aggregate_directory,
    aggregate_records,
)
from melee_moves.analytics import (
    character_moves,
    character_usage,
    games_frame,
    matchups,
    move_totals,
    player_games,
    stage_popularity,
)
from melee_moves.enums import CHARACTER_NAMES, STAGE_NAMES, character_name, stage_name
from melee_moves.errors import MeleeMovesError, RecordError, ReplayDecodeError, UnsupportedFormatError
from melee_moves.extract import classify_frame, extract_moves
from melee_moves.frames import FrameSnapshot, PlayerFrames, read_player_frames
from melee_moves.moves import ALL_MOVE_NAMES, BASE_MOVES, TECHNIQUE_NAMES, move_name
from melee_moves.parse import (
    game_record,
    iter_records,
    load_record,
    parse_directory,
    parse_game,
    save_record,
)
from melee_moves.plotting import plot_top_moves
from melee_moves.records import (
    AggregatedStats,
    GameRecord,
    PlayerInfo,
    PlayerMoveRecord,
    SummaryValue,
)
from melee_moves.report import OutputFormat, render
from melee_moves.techniques import TECHNIQUE_RULES, detect_techniques
