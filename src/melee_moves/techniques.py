"""Compound technique detection from a single frame snapshot.

These rules look at more than the action state: button bits, the post-frame
airborne flag, and the character. Each rule is evaluated on its own, so one
frame can match several techniques (and a base move) at once.

Counting is per qualifying frame. A wavedash landing or an L-cancel press that
satisfies its rule for several consecutive frames is counted once per frame.

Typical usage:
    from melee_moves.techniques import detect_techniques

    detect_techniques(snapshot, "Falco")  # -> ["shine"]
"""

from collections.abc import Callable
from dataclasses import dataclass

from melee_moves.enums import LASER_CHARACTER, is_spacie
from melee_moves.frames import FrameSnapshot
from melee_moves.moves import DOWN_B, L_CANCEL, LASER, NEUTRAL_B, SHINE, WAVEDASH

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_AIRDODGE = 39
_GROUNDED = 0

# Digital shield press during landing lag
_SHIELD_BUTTON = 0x40
_LANDING_LAG_MIN = 40
_LANDING_LAG_MAX = 43


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TechniqueRule:
    name: str
    matches: Callable[[FrameSnapshot, str], bool]


def _is_wavedash(snapshot: FrameSnapshot, character: str) -> bool:
    # Unknown airborne status never counts as a landing
    return (
        snapshot.action_state == _AIRDODGE
        and snapshot.airborne is not None
        and snapshot.airborne == _GROUNDED
    )


def _is_l_cancel(snapshot: FrameSnapshot, character: str) -> bool:
    return bool(snapshot.buttons & _SHIELD_BUTTON) and (
        _LANDING_LAG_MIN <= snapshot.action_state <= _LANDING_LAG_MAX
    )


def _is_shine(snapshot: FrameSnapshot, character: str) -> bool:
    return snapshot.action_state == DOWN_B and is_spacie(character)


def _is_laser(snapshot: FrameSnapshot, character: str) -> bool:
    return snapshot.action_state == NEUTRAL_B and character == LASER_CHARACTER


TECHNIQUE_RULES = (
    TechniqueRule(WAVEDASH, _is_wavedash),
    TechniqueRule(L_CANCEL, _is_l_cancel),
    TechniqueRule(SHINE, _is_shine),
    TechniqueRule(LASER, _is_laser),
)


def detect_techniques(snapshot: FrameSnapshot, character: str) -> list[str]:
    """Return the names of every technique rule this frame satisfies.

    Args:
        snapshot: The player's snapshot for one frame.
        character: The player's character name (e.g. "Fox").

    Returns:
        Technique names in rule order; empty if none match.
    """
    return [rule.name for rule in TECHNIQUE_RULES if rule.matches(snapshot, character)]
