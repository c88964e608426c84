"""Damage dice, hit chances and direction stepping used in combat."""

from __future__ import annotations

from typing import Optional

from rogueclone.core import (
    MIN_ROW,
    ROGUE_COLUMNS,
    ROGUE_LINES,
    Dice,
    GameObject,
    ObjKind,
)

_STRENGTH_LIMITS = (14, 17, 18, 20, 21, 30, 9999)
_STRENGTH_BONUS = (1, 3, 4, 5, 6, 7, 8)


def _cdiv(a: int, b: int) -> int:
    """Integer division that truncates toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def get_number(text: str) -> int:
    """The decimal number at the start of ``text``; 0 when there is none."""
    total = 0
    for ch in text:
        if not "0" <= ch <= "9":
            break
        total = total * 10 + (ord(ch) - ord("0"))
    return total


def get_damage(spec: str, dice: Optional[Dice] = None, randomize: bool = True) -> int:
    """Total of a damage specification such as ``"2d3"`` or ``"1d4/2d6"``.

    With ``randomize`` each die is rolled with ``dice``; otherwise every die
    counts its highest face.  A part without a ``d`` raises ValueError.
    """
    if randomize and dice is None:
        raise ValueError("rolling damage needs a Dice")
    total = 0
    pos = 0
    end = len(spec)
    while pos < end:
        count = get_number(spec[pos:])
        d_at = spec.find("d", pos)
        if d_at < 0:
            raise ValueError(f"malformed damage specification {spec!r}")
        pos = d_at + 1
        sides = get_number(spec[pos:])
        slash = spec.find("/", pos)
        pos = end if slash < 0 else slash
        for _ in range(count):
            total += dice.get_rand(1, sides) if randomize else sides
        if pos < end and spec[pos] == "/":
            pos += 1
    return total


def get_w_damage(obj: Optional[GameObject], dice: Dice) -> int:
    """Rolled damage of a weapon with its enchantments; -1 for a non-weapon."""
    if obj is None or obj.what_is != ObjKind.WEAPON:
        return -1
    count = get_number(obj.damage) + obj.hit_enchant
    d_at = obj.damage.find("d")
    if d_at < 0:
        raise ValueError(f"malformed damage specification {obj.damage!r}")
    sides = get_number(obj.damage[d_at + 1:]) + obj.d_enchant
    return get_damage(f"{count}d{sides}", dice, True)


def to_hit(obj: Optional[GameObject]) -> int:
    """The to-hit bonus of a weapon; 1 when fighting bare-handed."""
    if obj is None:
        return 1
    return get_number(obj.damage) + obj.hit_enchant


def damage_for_strength(strength: int) -> int:
    """Extra damage for the given current strength (ring bonus included)."""
    if strength <= 6:
        return strength - 5
    for limit, bonus in zip(_STRENGTH_LIMITS, _STRENGTH_BONUS):
        if strength <= limit:
            return bonus
    return _STRENGTH_BONUS[-1]


def get_dir_rc(direction: str, row: int, col: int,
               allow_off_screen: bool = False) -> tuple:
    """The square one step from ``row``, ``col`` in ``direction``.

    Unless ``allow_off_screen``, a step that would leave the map is not taken.
    Unknown direction keys leave the position as it is.
    """
    max_row = ROGUE_LINES - 2
    max_col = ROGUE_COLUMNS - 1
    can_up = allow_off_screen or row > MIN_ROW
    can_down = allow_off_screen or row < max_row
    can_left = allow_off_screen or col > 0
    can_right = allow_off_screen or col < max_col
    if direction == "h":
        if can_left:
            col -= 1
    elif direction == "j":
        if can_down:
            row += 1
    elif direction == "k":
        if can_up:
            row -= 1
    elif direction == "l":
        if can_right:
            col += 1
    elif direction == "y":
        if allow_off_screen or (can_up and can_left):
            row, col = row - 1, col - 1
    elif direction == "u":
        if allow_off_screen or (can_up and can_right):
            row, col = row - 1, col + 1
    elif direction == "n":
        if allow_off_screen or (can_down and can_right):
            row, col = row + 1, col + 1
    elif direction == "b":
        if allow_off_screen or (can_down and can_left):
            row, col = row + 1, col - 1
    return row, col


def get_hit_chance(weapon: Optional[GameObject], exp: int, ring_exp: int = 0,
                   r_rings: int = 0) -> int:
    """Percent chance that the player hits with ``weapon``."""
    chance = 40 + 3 * to_hit(weapon)
    chance += (2 * exp + 2 * ring_exp) - r_rings
    return chance


def get_weapon_damage(weapon: Optional[GameObject], strength: int, exp: int,
                      ring_exp: int = 0, r_rings: int = 0,
                      dice: Optional[Dice] = None) -> int:
    """Rolled damage of a player's blow with ``weapon``."""
    if dice is None:
        dice = Dice()
    damage = get_w_damage(weapon, dice) + damage_for_strength(strength)
    damage += _cdiv((exp + ring_exp - r_rings) + 1, 2)
    return damage