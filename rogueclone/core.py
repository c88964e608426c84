"""Shared game constants, flag sets, records and the random number source."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import IntEnum, IntFlag
from typing import Optional

ROGUE_LINES = 24
ROGUE_COLUMNS = 80
ROGUE_PATH_MAX = 4096

MAX_TITLE_LENGTH = 30
MAXSYLLABLES = 40
MAX_METAL = 14
WAND_MATERIALS = 30
GEMS = 14
GOLD_PERCENT = 46
MAX_PACK_COUNT = 24

# Armor kinds
LEATHER, RINGMAIL, SCALE, CHAIN, BANDED, SPLINT, PLATE = range(7)
ARMORS = 7

# Weapon kinds
BOW, DART, ARROW, DAGGER, SHURIKEN, MACE, LONG_SWORD, TWO_HANDED_SWORD = range(8)
WEAPONS = 8

# Scroll kinds
(PROTECT_ARMOR, HOLD_MONSTER, ENCH_WEAPON, ENCH_ARMOR, IDENTIFY, TELEPORT,
 SLEEP, SCARE_MONSTER, REMOVE_CURSE, CREATE_MONSTER, AGGRAVATE_MONSTER,
 MAGIC_MAPPING) = range(12)
SCROLS = 12

# Potion kinds
(INCREASE_STRENGTH, RESTORE_STRENGTH, HEALING, EXTRA_HEALING, POISON,
 RAISE_LEVEL, BLINDNESS, HALLUCINATION, DETECT_MONSTER, DETECT_OBJECTS,
 CONFUSION, LEVITATION, HASTE_SELF, SEE_INVISIBLE) = range(14)
POTIONS = 14

# Wand kinds
(TELE_AWAY, SLOW_MONSTER, CONFUSE_MONSTER, INVISIBILITY, POLYMORPH,
 HASTE_MONSTER, PUT_TO_SLEEP, MAGIC_MISSILE, CANCELLATION, DO_NOTHING) = range(10)
WANDS = 10

# Ring kinds
(STEALTH, R_TELEPORT, REGENERATION, SLOW_DIGEST, ADD_STRENGTH,
 SUSTAIN_STRENGTH, DEXTERITY, ADORNMENT, R_SEE_INVISIBLE, MAINTAIN_ARMOR,
 SEARCHING) = range(11)
RINGS = 11

# Food kinds
RATION = 0
FRUIT = 1

# Trap kinds
NO_TRAP = -1
(TRAP_DOOR, BEAR_TRAP, TELE_TRAP, DART_TRAP, SLEEPING_GAS_TRAP,
 RUST_TRAP) = range(6)
TRAPS = 6

STEALTH_FACTOR = 3
R_TELE_PERCENT = 8

INIT_HP = 12

MAXROOMS = 9
BIG_ROOM = 10
NO_ROOM = -1
PASSAGE = -3
AMULET_LEVEL = 26

MAX_EXP_LEVEL = 21
MAX_EXP = 10000000
MAX_GOLD = 900000
MAX_ARMOR = 99
MAX_HP = 800
MAX_STRENGTH = 99
LAST_DUNGEON = 99

PARTY_TIME = 10
MAX_TRAPS = 10
HIDE_PERCENT = 12

MONSTERS = 26
WAKE_PERCENT = 45
FLIT_PERCENT = 33
PARTY_WAKE_PERCENT = 75

# Causes of death other than a monster
HYPOTHERMIA = 1
STARVATION = 2
POISON_DART = 3
QUIT = 4
WIN = 5

# Directions
UPWARD, UPRIGHT, RIGHT, RIGHTDOWN, DOWN, DOWNLEFT, LEFT, LEFTUP = range(8)
DIRS = 8

ROW1 = 7
ROW2 = 15
COL1 = 26
COL2 = 52

# Move results
MOVED = 0
MOVE_FAILED = -1
STOPPED_ON_SOMETHING = -2

CANCEL = "\033"
LIST = "*"

# Hunger thresholds
HUNGRY = 300
WEAK = 150
FAINT = 20
STARVE = 0

MIN_ROW = 1


class Cell(IntFlag):
    """What occupies a square of the dungeon."""

    NOTHING = 0
    OBJECT = 0o1
    MONSTER = 0o2
    STAIRS = 0o4
    HORWALL = 0o10
    VERTWALL = 0o20
    DOOR = 0o40
    FLOOR = 0o100
    TUNNEL = 0o200
    TRAP = 0o400
    HIDDEN = 0o1000


class ObjKind(IntFlag):
    """Object categories."""

    GOLD = 0o1
    FOOD = 0o2
    ARMOR = 0o4
    WEAPON = 0o10
    SCROL = 0o20
    POTION = 0o40
    WAND = 0o100
    RING = 0o200
    AMULET = 0o400
    ALL_OBJECTS = 0o777


class InUse(IntFlag):
    """How an object in the pack is being used."""

    NOT_USED = 0
    BEING_WIELDED = 0o1
    BEING_WORN = 0o2
    ON_LEFT_HAND = 0o4
    ON_RIGHT_HAND = 0o10
    ON_EITHER_HAND = 0o14
    BEING_USED = 0o17


class IdStatus(IntEnum):
    """How well an object kind is known to the player."""

    UNIDENTIFIED = 0
    IDENTIFIED = 1
    CALLED = 2


class RoomKind(IntFlag):
    """What a room slot of the level grid holds."""

    NOTHING = 0o1
    ROOM = 0o2
    MAZE = 0o4
    DEADEND = 0o10
    CROSS = 0o20


class MonsterFlag(IntFlag):
    """Monster abilities and states."""

    NONE = 0
    HASTED = 0o1
    SLOWED = 0o2
    INVISIBLE = 0o4
    ASLEEP = 0o10
    WAKENS = 0o20
    WANDERS = 0o40
    FLIES = 0o100
    FLITS = 0o200
    CAN_FLIT = 0o400
    CONFUSED = 0o1000
    RUSTS = 0o2000
    HOLDS = 0o4000
    FREEZES = 0o10000
    STEALS_GOLD = 0o20000
    STEALS_ITEM = 0o40000
    STINGS = 0o100000
    DRAINS_LIFE = 0o200000
    DROPS_LEVEL = 0o400000
    SEEKS_GOLD = 0o1000000
    FREEZING_ROGUE = 0o2000000
    RUST_VANISHED = 0o4000000
    CONFUSES = 0o10000000
    IMITATES = 0o20000000
    FLAMES = 0o40000000
    STATIONARY = 0o100000000
    NAPPING = 0o200000000
    ALREADY_MOVED = 0o400000000
    SPECIAL_HIT = (RUSTS | HOLDS | FREEZES | STEALS_GOLD | STEALS_ITEM
                   | STINGS | DRAINS_LIFE | DROPS_LEVEL)


class Stat(IntFlag):
    """Fields of the status line."""

    LEVEL = 0o1
    GOLD = 0o2
    HP = 0o4
    STRENGTH = 0o10
    ARMOR = 0o20
    EXP = 0o40
    HUNGER = 0o100
    LABEL = 0o200
    ALL = 0o377


def _alias(name: str) -> property:
    def getter(self):
        return getattr(self, name)

    def setter(self, value):
        setattr(self, name, value)

    return property(getter, setter, doc=f"Monster view of ``{name}``.")


@dataclass(eq=False)
class GameObject:
    """An item or a monster; monsters reuse item fields under other names."""

    m_flags: MonsterFlag = MonsterFlag.NONE
    damage: str = ""
    quantity: int = 1
    ichar: str = ""
    kill_exp: int = 0
    is_protected: int = 0
    is_cursed: int = 0
    obj_class: int = 0
    identified: int = 0
    which_kind: int = 0
    o_row: int = 0
    o_col: int = 0
    o: int = 0
    row: int = 0
    col: int = 0
    d_enchant: int = 0
    quiver: int = 0
    trow: int = 0
    tcol: int = 0
    hit_enchant: int = 0
    what_is: ObjKind = ObjKind(0)
    picked_up: int = 0
    in_use_flags: InUse = InUse.NOT_USED

    m_damage = _alias("damage")
    hp_to_kill = _alias("quantity")
    m_char = _alias("ichar")
    first_level = _alias("is_protected")
    last_level = _alias("is_cursed")
    m_hit_chance = _alias("obj_class")
    stationary_damage = _alias("identified")
    drop_percent = _alias("which_kind")
    trail_char = _alias("d_enchant")
    slowed_toggle = _alias("quiver")
    moves_confused = _alias("hit_enchant")
    nap_length = _alias("picked_up")
    disguise = _alias("what_is")


@dataclass
class Fighter:
    """The player character."""

    armor: Optional[GameObject] = None
    weapon: Optional[GameObject] = None
    left_ring: Optional[GameObject] = None
    right_ring: Optional[GameObject] = None
    hp_current: int = INIT_HP
    hp_max: int = INIT_HP
    str_current: int = 16
    str_max: int = 16
    pack: list = field(default_factory=list)
    gold: int = 0
    exp: int = 1
    exp_points: int = 0
    row: int = -1
    col: int = -1
    fchar: str = "@"
    moves_left: int = 1250


@dataclass
class Door:
    """A door of a room and where its passage leads."""

    oth_room: int = NO_ROOM
    oth_row: int = 0
    oth_col: int = 0
    door_row: int = 0
    door_col: int = 0


@dataclass
class Room:
    """One of the nine room slots of a level."""

    bottom_row: int = 0
    right_col: int = 0
    left_col: int = 0
    top_row: int = 0
    doors: list = field(default_factory=lambda: [Door() for _ in range(4)])
    is_room: RoomKind = RoomKind.NOTHING


@dataclass
class Trap:
    """A trap placed on a level."""

    trap_type: int = NO_TRAP
    trap_row: int = 0
    trap_col: int = 0


@dataclass
class IdEntry:
    """What is known about one kind of scroll, potion, wand, ring and so on."""

    value: int = 0
    title: str = ""
    real: str = ""
    id_status: IdStatus = IdStatus.UNIDENTIFIED


@dataclass(frozen=True, order=True)
class RogueTime:
    """A calendar time, compared field by field from the year down."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int


class Dice:
    """The game's random number source."""

    def __init__(self, seed=None):
        self._random = random.Random(seed)

    def seed(self, seed) -> None:
        """Restart the sequence from ``seed``."""
        self._random.seed(seed)

    def get_rand(self, low: int, high: int) -> int:
        """A random integer between ``low`` and ``high``, both included."""
        if low > high:
            low, high = high, low
        return self._random.randint(low, high)

    def rand_percent(self, percentage: int) -> bool:
        """True with the given chance in percent."""
        return self.get_rand(1, 100) <= percentage

    def coin_toss(self) -> bool:
        """True or False with even chance."""
        return self.rand_percent(50)