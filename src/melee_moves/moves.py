"""Base move catalog: action state code -> move name.

These codes are the classifier's own move IDs, read from the pre-frame
action state. Anything outside the table is not a counted move.
"""

from types import MappingProxyType

BASE_MOVES = MappingProxyType({
    # Aerials
    13: "nair",
    14: "fair",
    15: "bair",
    16: "uair",
    17: "dair",

    # Ground attacks
    18: "jab",
    19: "ftilt",
    20: "utilt",
    21: "dtilt",
    22: "fsmash",
    23: "usmash",
    24: "dsmash",

    # Specials
    25: "neutral_b",
    26: "side_b",
    27: "up_b",
    28: "down_b",

    # Grab / dash attack
    29: "grab",
    30: "dash_attack",

    # Movement
    31: "jump",
    32: "double_jump",
})

MOVE_CODES = MappingProxyType({v: k for k, v in BASE_MOVES.items()})

NEUTRAL_B = MOVE_CODES["neutral_b"]
DOWN_B = MOVE_CODES["down_b"]


def move_name(code: int) -> str | None:
    """Resolve an action state code to its base move name, or None if unmapped."""
    return BASE_MOVES.get(code)

# Compound techniques detected by melee_moves.techniques
WAVEDASH = "wavedash"
L_CANCEL = "l_cancel"
SHINE = "shine"
LASER = "laser"

TECHNIQUE_NAMES = (WAVEDASH, L_CANCEL, SHINE, LASER)

ALL_MOVE_NAMES = tuple(BASE_MOVES.values()) + TECHNIQUE_NAMES
