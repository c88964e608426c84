"""Identification tables and the descriptions of items in the pack."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Union

from rogueclone.core import (
    ADD_STRENGTH,
    ARMORS,
    DEXTERITY,
    GEMS,
    MAX_METAL,
    MAX_TITLE_LENGTH,
    MAXSYLLABLES,
    POTIONS,
    RATION,
    RINGS,
    SCROLS,
    WAND_MATERIALS,
    WANDS,
    WEAPONS,
    Dice,
    GameObject,
    IdEntry,
    IdStatus,
    InUse,
    ObjKind,
)

DEFAULT_TEXTS: Mapping[int, str] = {
    3: "scroll ",
    4: "potion ",
    5: "wand ",
    8: "ring ",
    27: "The Amulet of Yendor",
    28: "%d pieces of gold",
    30: "%d rations of ",
    33: "entitled: ",
    34: "called ",
    35: "(weapon in hand)",
    36: "(being worn)",
    37: "(on left hand)",
    38: "(on right hand)",
    39: "",
    40: "",
    46: "Nothing discovered",
    47: "Haven't discovered anything about any %s",
}

RIGHT_HAND_TEXT = "(on right hand)"
DISCOVERY_KEYS = "?!/=*"

_FULL_DIGITS = ("０", "１", "２", "３", "４", "５", "６", "７", "８", "９")
_FULL_PLUS = "＋"
_FULL_MINUS = "−"

_ID, _CALL, _UNID = "identified", "called", "unidentified"

ArmorClass = Union[int, Callable[[GameObject], int], None]


def _entries(count: int) -> List[IdEntry]:
    return [IdEntry() for _ in range(count)]


def _euc_len(text: str) -> int:
    return len(text.encode("euc-jp", errors="replace"))


def znum(n: int, plus: bool = False) -> str:
    """``n`` written with full-width digits, signed with a full-width plus if asked."""
    prefix = _FULL_PLUS if plus and n >= 0 else ""
    digits = "".join(_FULL_MINUS if ch == "-" else _FULL_DIGITS[int(ch)] for ch in str(n))
    return prefix + digits


@dataclass
class IdTables:
    """What the player knows about each kind of scroll, potion, wand, ring,
    weapon and armor, together with the texts used to describe them."""

    scrolls: List[IdEntry] = field(default_factory=lambda: _entries(SCROLS))
    potions: List[IdEntry] = field(default_factory=lambda: _entries(POTIONS))
    wands: List[IdEntry] = field(default_factory=lambda: _entries(WANDS))
    rings: List[IdEntry] = field(default_factory=lambda: _entries(RINGS))
    weapons: List[IdEntry] = field(default_factory=lambda: _entries(WEAPONS))
    armors: List[IdEntry] = field(default_factory=lambda: _entries(ARMORS))
    is_wood: List[bool] = field(default_factory=lambda: [False] * WANDS)
    texts: Any = field(default_factory=lambda: dict(DEFAULT_TEXTS))
    japanese: bool = False
    armor_class: Optional[Callable[[GameObject], int]] = None

    def text(self, number: int) -> str:
        """Message ``number``, falling back to the built-in English text."""
        try:
            return self.texts[number]
        except (KeyError, IndexError):
            return DEFAULT_TEXTS.get(number, "")

    def mix_colors(self, colors: Sequence[str], dice: Dice) -> None:
        """Give the potion kinds the colours in ``colors``, shuffled."""
        if len(colors) < POTIONS:
            raise ValueError(f"need {POTIONS} potion colours, got {len(colors)}")
        titles = list(colors[:POTIONS])
        for i in range(POTIONS):
            j = dice.get_rand(i, POTIONS - 1)
            titles[i], titles[j] = titles[j], titles[i]
        for entry, title in zip(self.potions, titles):
            entry.title = title

    def make_scroll_titles(self, syllables: Sequence[str], dice: Dice) -> None:
        """Make up a title of two to five random syllables for each scroll kind.

        Syllable 0 is never used.  The last character of the joined
        syllables (normally a blank) is replaced by the closing quote.
        """
        if len(syllables) < MAXSYLLABLES:
            raise ValueError(f"need {MAXSYLLABLES} syllables, got {len(syllables)}")
        for entry in self.scrolls:
            count = dice.get_rand(2, 5)
            if self.japanese:
                title = "「"
                length = 2
                for _ in range(count):
                    syllable = syllables[dice.get_rand(1, MAXSYLLABLES - 1)]
                    n = _euc_len(syllable)
                    if length + n - 1 >= MAX_TITLE_LENGTH - 2:
                        break
                    title += syllable
                    length += n
                entry.title = title[:-1] + "」"
            else:
                title = "'" + "".join(
                    syllables[dice.get_rand(1, MAXSYLLABLES - 1)] for _ in range(count))
                entry.title = title[:-1] + "' "

    def assign_materials(self, materials: Sequence[str], gems: Sequence[str],
                         dice: Dice) -> None:
        """Give every wand a distinct material and every ring a distinct gem."""
        if len(materials) < WAND_MATERIALS:
            raise ValueError(f"need {WAND_MATERIALS} wand materials, got {len(materials)}")
        if len(gems) < GEMS:
            raise ValueError(f"need {GEMS} gems, got {len(gems)}")
        used = set()
        for i, entry in enumerate(self.wands):
            while (j := dice.get_rand(0, WAND_MATERIALS - 1)) in used:
                pass
            used.add(j)
            entry.title = materials[j] + (self.text(39) if self.japanese else "")
            self.is_wood[i] = j > MAX_METAL
        used = set()
        for entry in self.rings:
            while (j := dice.get_rand(0, GEMS - 1)) in used:
                pass
            used.add(j)
            entry.title = gems[j] + (self.text(40) if self.japanese else "")

    def table_for(self, obj: GameObject) -> Optional[List[IdEntry]]:
        """The identification table of the object's kind, or None."""
        return {
            ObjKind.SCROL: self.scrolls,
            ObjKind.POTION: self.potions,
            ObjKind.WAND: self.wands,
            ObjKind.RING: self.rings,
            ObjKind.WEAPON: self.weapons,
            ObjKind.ARMOR: self.armors,
        }.get(obj.what_is)

    def discovered(self, kinds: str = "*", wizard: bool = False) -> List[str]:
        """Lines listing the known kinds of '?' scrolls, '!' potions,
        '/' wands, '=' rings, or '*' all of them.

        Each group ends with a blank line.  An empty list means nothing at
        all has been discovered.
        """
        if len(kinds) != 1 or kinds not in DISCOVERY_KEYS:
            raise ValueError(f"unknown discovery key {kinds!r}")
        groups = (
            (ObjKind.SCROL, "?", 3, self.scrolls),
            (ObjKind.POTION, "!", 4, self.potions),
            (ObjKind.WAND, "/", 5, self.wands),
            (ObjKind.RING, "=", 8, self.rings),
        )
        lines: List[str] = []
        found = False
        for kind, key, name_number, table in groups:
            if kinds not in (key, "*"):
                continue
            name = self.text(name_number)
            group_found = False
            for i, entry in enumerate(table):
                if entry.id_status not in (IdStatus.IDENTIFIED, IdStatus.CALLED):
                    continue
                group_found = True
                if wizard or entry.id_status == IdStatus.IDENTIFIED:
                    real, sub = entry.real, ""
                else:
                    real, sub = entry.title, self.text(34)
                if self.japanese:
                    lines.append("  " + real + sub + name)
                else:
                    item = "staff " if kind == ObjKind.WAND and self.is_wood[i] else name
                    lines.append(" " + item[:1].upper() + item[1:] + real)
            if not group_found:
                line = self.text(47) % name
                if not self.japanese and line:
                    line = line[:-1] + "s"
                lines.append(line)
            lines.append("")
            found = found or group_found
        return lines if found else []


def _state(obj: GameObject, table: List[IdEntry], wizard: bool) -> str:
    if wizard:
        return _ID
    kind = obj.what_is
    status = table[obj.which_kind].id_status
    if not kind & (ObjKind.WEAPON | ObjKind.ARMOR | ObjKind.WAND | ObjKind.RING):
        if status == IdStatus.IDENTIFIED:
            return _ID
        if status == IdStatus.CALLED:
            return _CALL
        return _UNID
    if kind in (ObjKind.WAND, ObjKind.RING):
        if obj.identified or status == IdStatus.IDENTIFIED:
            return _ID
        if status == IdStatus.CALLED:
            return _CALL
    elif obj.identified:
        return _ID
    return _UNID


def _resolve_armor_class(obj: GameObject, tables: IdTables, armor_class: ArmorClass) -> int:
    source = armor_class if armor_class is not None else tables.armor_class
    if source is None:
        raise ValueError("describing identified armor needs its armor class")
    return source(obj) if callable(source) else int(source)


def _in_use(obj: GameObject, tables: IdTables) -> str:
    flags = obj.in_use_flags
    if flags & InUse.BEING_WIELDED:
        return tables.text(35)
    if flags & InUse.BEING_WORN:
        return tables.text(36)
    if flags & InUse.ON_LEFT_HAND:
        return tables.text(37)
    if flags & InUse.ON_RIGHT_HAND:
        return tables.text(38) if tables.japanese else RIGHT_HAND_TEXT
    return ""


def _signed(n: int) -> str:
    return f"+{n}" if n >= 0 else str(n)


def _english_body(obj, tables, table, desc, item_name, wizard, armor_class) -> str:
    kind = obj.what_is
    entry = table[obj.which_kind]
    state = _state(obj, table, wizard)
    if state == _UNID:
        if kind == ObjKind.SCROL:
            return desc + item_name + tables.text(33) + entry.title
        if kind in (ObjKind.POTION, ObjKind.WAND, ObjKind.RING):
            return desc + entry.title + item_name
        if kind == ObjKind.ARMOR:
            return entry.title
        if kind == ObjKind.WEAPON:
            return desc + item_name
        return desc
    if state == _CALL:
        if kind in (ObjKind.SCROL, ObjKind.POTION, ObjKind.WAND, ObjKind.RING):
            return desc + item_name + tables.text(34) + entry.title
        return desc
    known = wizard or obj.identified
    if kind in (ObjKind.SCROL, ObjKind.POTION):
        return desc + item_name + entry.real
    if kind == ObjKind.RING:
        extra = ""
        if known and obj.which_kind in (DEXTERITY, ADD_STRENGTH):
            extra = f"{'+' if obj.obj_class > 0 else ''}{obj.obj_class} "
        return desc + extra + item_name + entry.real
    if kind == ObjKind.WAND:
        charges = f"[{obj.obj_class}]" if known else ""
        return desc + item_name + entry.real + charges
    if kind == ObjKind.ARMOR:
        ac = _resolve_armor_class(obj, tables, armor_class)
        return f"{_signed(obj.d_enchant)} " + entry.title + f"[{ac}] "
    if kind == ObjKind.WEAPON:
        return desc + f"{_signed(obj.hit_enchant)}, {_signed(obj.d_enchant)} " + item_name
    return desc


def _english_desc(obj, tables, item_name, capitalized, wizard, armor_class) -> str:
    kind = obj.what_is
    if kind == ObjKind.AMULET:
        desc = tables.text(27)
        return desc if capitalized or not desc else "t" + desc[1:]
    if kind == ObjKind.GOLD:
        return tables.text(28) % obj.quantity
    article = "A " if capitalized else "a "
    desc = ""
    if kind != ObjKind.ARMOR:
        desc = article if obj.quantity == 1 else f"{obj.quantity} "
    if kind == ObjKind.FOOD:
        if obj.which_kind == RATION:
            if obj.quantity > 1:
                desc = tables.text(30) % obj.quantity
            else:
                desc = "Some " if capitalized else "some "
        else:
            desc = article
        desc += item_name
    else:
        table = tables.table_for(obj)
        if table is None:
            raise ValueError(f"no identification table for object kind {kind!r}")
        desc = _english_body(obj, tables, table, desc, item_name, wizard, armor_class)
    if desc.startswith(article) and len(desc) > 2 and desc[2] in "aeiou":
        desc = desc[0] + "n" + desc[1:]
    return desc + _in_use(obj, tables)


def _japanese_body(obj, tables, table, desc, item_name, wizard, armor_class) -> str:
    kind = obj.what_is
    entry = table[obj.which_kind]
    state = _state(obj, table, wizard)
    if state == _UNID:
        if kind == ObjKind.SCROL:
            return desc + entry.title + tables.text(33) + item_name
        if kind in (ObjKind.POTION, ObjKind.WAND, ObjKind.RING):
            return desc + entry.title + item_name
        if kind == ObjKind.ARMOR:
            return entry.title
        if kind == ObjKind.WEAPON:
            return desc + item_name
        return desc
    if state == _CALL:
        if kind in (ObjKind.SCROL, ObjKind.POTION, ObjKind.WAND, ObjKind.RING):
            title = entry.title
            if desc and title and " " <= title[0] < "\x80":
                desc += " "
            return desc + title + tables.text(34) + item_name
        return desc
    known = wizard or obj.identified
    if kind in (ObjKind.SCROL, ObjKind.POTION):
        return desc + entry.real + item_name
    if kind == ObjKind.RING:
        extra = ""
        if known and obj.which_kind in (DEXTERITY, ADD_STRENGTH):
            extra = "（" + znum(obj.obj_class, True) + "）"
        return desc + entry.real + extra + item_name
    if kind == ObjKind.WAND:
        charges = "［" + znum(obj.obj_class) + "］" if known else ""
        return desc + entry.real + item_name + charges
    if kind == ObjKind.ARMOR:
        ac = _resolve_armor_class(obj, tables, armor_class)
        return "（" + znum(obj.d_enchant, True) + "）" + entry.title + "［" + znum(ac) + "］"
    if kind == ObjKind.WEAPON:
        return (desc + "（" + znum(obj.hit_enchant, True) + "，"
                + znum(obj.d_enchant, True) + "）" + item_name)
    return desc


def _japanese_desc(obj, tables, item_name, wizard, armor_class) -> str:
    kind = obj.what_is
    if kind == ObjKind.AMULET:
        return tables.text(27)
    if kind == ObjKind.GOLD:
        return znum(obj.quantity) + tables.text(28)
    desc = ""
    if kind == ObjKind.WEAPON and obj.quantity > 1:
        desc = znum(obj.quantity) + tables.text(29)
    elif kind == ObjKind.FOOD:
        counter = tables.text(30) if obj.which_kind == RATION else tables.text(31)
        return znum(obj.quantity) + counter + item_name + _in_use(obj, tables)
    elif kind != ObjKind.ARMOR and obj.quantity > 1:
        desc = znum(obj.quantity) + tables.text(32)
    table = tables.table_for(obj)
    if table is None:
        raise ValueError(f"no identification table for object kind {kind!r}")
    desc = _japanese_body(obj, tables, table, desc, item_name, wizard, armor_class)
    return desc + _in_use(obj, tables)


def get_desc(obj: GameObject, tables: IdTables, item_name: str = "",
             capitalized: bool = False, wizard: bool = False,
             armor_class: ArmorClass = None) -> str:
    """Describe ``obj`` as the player knows it.

    ``item_name`` is the object's kind name (such as "potion " or "mace").
    ``armor_class`` (a number or a function of the armor) is needed only
    for identified armor; it defaults to ``tables.armor_class``.
    """
    if tables.japanese:
        return _japanese_desc(obj, tables, item_name, wizard, armor_class)
    return _english_desc(obj, tables, item_name, capitalized, wizard, armor_class)


def inventory_lines(pack: Iterable[GameObject], mask: int = ObjKind.ALL_OBJECTS,
                    tables: Optional[IdTables] = None,
                    names: Optional[Callable[[GameObject], str]] = None,
                    wizard: bool = False) -> List[str]:
    """One line per pack object whose kind is in ``mask``: letter, marker, description.

    Protected armor is marked with '}' instead of ')'.
    """
    if tables is None:
        tables = IdTables()
    lines = []
    for obj in pack:
        if not obj.what_is & mask:
            continue
        marker = "}" if obj.what_is & ObjKind.ARMOR and obj.is_protected else ")"
        name = names(obj) if names is not None else ""
        lines.append(f" {obj.ichar}{marker} " + get_desc(obj, tables, name, False, wizard))
    return lines