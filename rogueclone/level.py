"""Dungeon level generation and experience levels."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from rogueclone.core import (
    AMULET_LEVEL,
    BIG_ROOM,
    COL1,
    COL2,
    DIRS,
    DOWN,
    HIDE_PERCENT,
    INIT_HP,
    LAST_DUNGEON,
    LEFT,
    MAX_EXP,
    MAX_EXP_LEVEL,
    MAX_TRAPS,
    MAXROOMS,
    MIN_ROW,
    NO_ROOM,
    RIGHT,
    ROGUE_COLUMNS,
    ROGUE_LINES,
    ROW1,
    ROW2,
    UPWARD,
    Cell,
    Dice,
    Fighter,
    Room,
    RoomKind,
    Trap,
)

LEVEL_POINTS = (
    10, 20, 40, 80, 160, 320, 640, 1300, 2600, 5200, 10000, 20000, 40000,
    80000, 160000, 320000, 1000000, 3333333, 6666666, MAX_EXP, 99900000,
)

_INITIAL_RANDOM_ROOMS = (3, 7, 5, 2, 0, 6, 1, 4, 8)
_INITIAL_OFFSETS = (-1, 1, 3, -3)
_REAL = RoomKind.ROOM | RoomKind.MAZE


def _cdiv(a: int, b: int) -> int:
    """Integer division that truncates toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def same_row(room1: int, room2: int) -> bool:
    """True when both room slots lie in the same row of the 3x3 grid."""
    return room1 // 3 == room2 // 3


def same_col(room1: int, room2: int) -> bool:
    """True when both room slots lie in the same column of the 3x3 grid."""
    return room1 % 3 == room2 % 3


class Level:
    """The dungeon map of one level and the generator that fills it."""

    def __init__(self, dice: Optional[Dice] = None, cur_level: int = 0,
                 max_level: int = 1) -> None:
        self.dice = dice if dice is not None else Dice()
        self.cur_level = cur_level
        self.max_level = max_level
        self.party_room = NO_ROOM
        self.r_de = NO_ROOM
        self.random_rooms: List[int] = list(_INITIAL_RANDOM_ROOMS)
        self._offsets: List[int] = list(_INITIAL_OFFSETS)
        self.rooms: List[Room] = [Room() for _ in range(MAXROOMS)]
        self.traps: List[Trap] = [Trap() for _ in range(MAX_TRAPS)]
        self.dungeon: List[List[Cell]] = []
        self.clear()

    def _at(self, row: int, col: int) -> Cell:
        if 0 <= row < ROGUE_LINES and 0 <= col < ROGUE_COLUMNS:
            return self.dungeon[row][col]
        return Cell.NOTHING

    def clear(self) -> None:
        """Empty the map, the rooms and the traps."""
        for rm in self.rooms:
            rm.is_room = RoomKind.NOTHING
            for door in rm.doors:
                door.oth_room = NO_ROOM
        for trap in self.traps:
            trap.trap_type = -1
        self.dungeon = [[Cell.NOTHING] * ROGUE_COLUMNS for _ in range(ROGUE_LINES)]
        self.party_room = NO_ROOM

    def make_level(self, party_counter: int) -> bool:
        """Go one level deeper and lay out its rooms, mazes and passages.

        Returns True when the level is one big room.
        """
        dice = self.dice
        if self.cur_level < LAST_DUNGEON:
            self.cur_level += 1
        if self.cur_level > self.max_level:
            self.max_level = self.cur_level
        must_exist1 = dice.get_rand(0, 2)
        vertical = dice.coin_toss()
        if vertical:
            must_exist2 = must_exist1 + 3
            must_exist3 = must_exist2 + 3
        else:
            must_exist1 *= 3
            must_exist2 = must_exist1 + 1
            must_exist3 = must_exist2 + 1
        big_room = self.cur_level == party_counter and dice.rand_percent(1)
        if big_room:
            self.make_room(BIG_ROOM, 0, 0, 0)
            return True
        for i in range(MAXROOMS):
            self.make_room(i, must_exist1, must_exist2, must_exist3)
        self.add_mazes()
        self.mix_random_rooms()
        for i in list(self.random_rooms):
            if i < MAXROOMS - 1:
                self.connect_rooms(i, i + 1)
            if i < MAXROOMS - 3:
                self.connect_rooms(i, i + 3)
            if i < MAXROOMS - 2:
                if (self.rooms[i + 1].is_room & RoomKind.NOTHING
                        and (i + 1 != 4 or vertical)):
                    if self.connect_rooms(i, i + 2):
                        self.rooms[i + 1].is_room = RoomKind.CROSS
            if i < MAXROOMS - 6:
                if (self.rooms[i + 3].is_room & RoomKind.NOTHING
                        and (i + 3 != 4 or not vertical)):
                    if self.connect_rooms(i, i + 6):
                        self.rooms[i + 3].is_room = RoomKind.CROSS
            if self._is_all_connected():
                break
        self.fill_out_level()
        return False

    def _is_all_connected(self) -> bool:
        real = [i for i, rm in enumerate(self.rooms) if rm.is_room & _REAL]
        if not real:
            return True
        seen = {real[0]}
        stack = [real[0]]
        while stack:
            rn = stack.pop()
            for door in self.rooms[rn].doors:
                other = door.oth_room
                if other != NO_ROOM and other not in seen:
                    seen.add(other)
                    stack.append(other)
        return all(i in seen for i in real)

    def make_room(self, rn: int, r1: int, r2: int, r3: int) -> None:
        """Place room slot ``rn``; slots other than r1, r2, r3 may stay empty."""
        dice = self.dice
        if rn == BIG_ROOM:
            top_row = dice.get_rand(MIN_ROW, MIN_ROW + 5)
            bottom_row = dice.get_rand(ROGUE_LINES - 7, ROGUE_LINES - 2)
            left_col = dice.get_rand(0, 10)
            right_col = dice.get_rand(ROGUE_COLUMNS - 11, ROGUE_COLUMNS - 2)
            rn = 0
            build = True
        else:
            left_col, right_col = {
                0: (0, COL1 - 1),
                1: (COL1 + 1, COL2 - 1),
            }.get(rn % 3, (COL2 + 1, ROGUE_COLUMNS - 2))
            top_row, bottom_row = {
                0: (MIN_ROW, ROW1 - 1),
                1: (ROW1 + 1, ROW2 - 1),
            }.get(rn // 3, (ROW2 + 1, ROGUE_LINES - 2))
            height = dice.get_rand(4, bottom_row - top_row + 1)
            width = dice.get_rand(7, right_col - left_col - 2)
            row_offset = dice.get_rand(0, (bottom_row - top_row) - height + 1)
            col_offset = dice.get_rand(0, (right_col - left_col) - width + 1)
            top_row += row_offset
            bottom_row = top_row + height - 1
            left_col += col_offset
            right_col = left_col + width - 1
            build = rn in (r1, r2, r3) or not dice.rand_percent(40)
        rm = self.rooms[rn]
        if build:
            rm.is_room = RoomKind.ROOM
            for i in range(top_row, bottom_row + 1):
                for j in range(left_col, right_col + 1):
                    if i in (top_row, bottom_row):
                        ch = Cell.HORWALL
                    elif j in (left_col, right_col):
                        ch = Cell.VERTWALL
                    else:
                        ch = Cell.FLOOR
                    self.dungeon[i][j] = ch
        rm.top_row = top_row
        rm.bottom_row = bottom_row
        rm.left_col = left_col
        rm.right_col = right_col

    def connect_rooms(self, room1: int, room2: int) -> bool:
        """Join two neighbouring rooms or mazes by a passage."""
        rm1, rm2 = self.rooms[room1], self.rooms[room2]
        if not (rm1.is_room & _REAL) or not (rm2.is_room & _REAL):
            return False
        if same_row(room1, room2):
            if rm1.left_col > rm2.right_col:
                direction, rev = LEFT, RIGHT
            else:
                direction, rev = RIGHT, LEFT
        elif same_col(room1, room2):
            if rm1.top_row > rm2.bottom_row:
                direction, rev = UPWARD, DOWN
            else:
                direction, rev = DOWN, UPWARD
        else:
            return False
        row1, col1 = self.put_door(rm1, direction)
        row2, col2 = self.put_door(rm2, rev)
        while True:
            self.draw_simple_passage(row1, col1, row2, col2, direction)
            if not self.dice.rand_percent(4):
                break
        dp = rm1.doors[direction // 2]
        dp.oth_room, dp.oth_row, dp.oth_col = room2, row2, col2
        dp = rm2.doors[((direction + 4) % DIRS) // 2]
        dp.oth_room, dp.oth_row, dp.oth_col = room1, row1, col1
        return True

    def put_door(self, rm: Room, direction: int) -> Tuple[int, int]:
        """Place a door on the ``direction`` side of ``rm``; returns its square."""
        dice = self.dice
        wall_width = 0 if rm.is_room & RoomKind.MAZE else 1
        row = col = 0
        if direction in (UPWARD, DOWN):
            row = rm.top_row if direction == UPWARD else rm.bottom_row
            while True:
                col = dice.get_rand(rm.left_col + wall_width, rm.right_col - wall_width)
                if self.dungeon[row][col] & (Cell.HORWALL | Cell.TUNNEL):
                    break
        elif direction in (RIGHT, LEFT):
            col = rm.left_col if direction == LEFT else rm.right_col
            while True:
                row = dice.get_rand(rm.top_row + wall_width, rm.bottom_row - wall_width)
                if self.dungeon[row][col] & (Cell.VERTWALL | Cell.TUNNEL):
                    break
        if rm.is_room & RoomKind.ROOM:
            self.dungeon[row][col] = Cell.DOOR
        if self.cur_level > 2 and dice.rand_percent(HIDE_PERCENT):
            self.dungeon[row][col] |= Cell.HIDDEN
        door = rm.doors[direction // 2]
        door.door_row, door.door_col = row, col
        return row, col

    def draw_simple_passage(self, row1: int, col1: int, row2: int, col2: int,
                            direction: int) -> None:
        """Dig a three-legged passage between two squares."""
        grid = self.dungeon
        if direction in (LEFT, RIGHT):
            if col1 > col2:
                row1, row2 = row2, row1
                col1, col2 = col2, col1
            middle = self.dice.get_rand(col1 + 1, col2 - 1)
            for i in range(col1 + 1, middle):
                grid[row1][i] = Cell.TUNNEL
            step = -1 if row1 > row2 else 1
            for i in range(row1, row2, step):
                grid[i][middle] = Cell.TUNNEL
            for i in range(middle, col2):
                grid[row2][i] = Cell.TUNNEL
        else:
            if row1 > row2:
                row1, row2 = row2, row1
                col1, col2 = col2, col1
            middle = self.dice.get_rand(row1 + 1, row2 - 1)
            for i in range(row1 + 1, middle):
                grid[i][col1] = Cell.TUNNEL
            step = -1 if col1 > col2 else 1
            for i in range(col1, col2, step):
                grid[middle][i] = Cell.TUNNEL
            for i in range(middle, row2):
                grid[i][col2] = Cell.TUNNEL
        if self.dice.rand_percent(HIDE_PERCENT):
            self.hide_boxed_passage(row1, col1, row2, col2, 1)

    def add_mazes(self) -> None:
        """Turn some empty slots into mazes below the first level."""
        dice = self.dice
        if self.cur_level <= 1:
            return
        start = dice.get_rand(0, MAXROOMS - 1)
        maze_percent = (self.cur_level * 5) // 4
        if self.cur_level > 15:
            maze_percent += self.cur_level
        for i in range(MAXROOMS):
            rm = self.rooms[(start + i) % MAXROOMS]
            if rm.is_room & RoomKind.NOTHING and dice.rand_percent(maze_percent):
                rm.is_room = RoomKind.MAZE
                self.make_maze(dice.get_rand(rm.top_row + 1, rm.bottom_row - 1),
                               dice.get_rand(rm.left_col + 1, rm.right_col - 1),
                               rm.top_row, rm.bottom_row, rm.left_col, rm.right_col)
                self.hide_boxed_passage(rm.top_row, rm.left_col, rm.bottom_row,
                                        rm.right_col, dice.get_rand(0, 2))

    def fill_out_level(self) -> None:
        """Run dead-end passages into empty and some crossing slots."""
        self.mix_random_rooms()
        self.r_de = NO_ROOM
        for rn in list(self.random_rooms):
            kind = self.rooms[rn].is_room
            if kind & RoomKind.NOTHING or (kind & RoomKind.CROSS and self.dice.coin_toss()):
                self.fill_it(rn, True)
        if self.r_de != NO_ROOM:
            self.fill_it(self.r_de, False)

    def fill_it(self, rn: int, do_rec_de: bool) -> None:
        """Connect slot ``rn`` to a neighbouring room with a dead-end passage."""
        dice = self.dice
        offsets = self._offsets
        for _ in range(10):
            a = dice.get_rand(0, 3)
            b = dice.get_rand(0, 3)
            offsets[a], offsets[b] = offsets[b], offsets[a]
        rooms_found = 0
        did_this = False
        here = self.rooms[rn]
        for i, offset in enumerate(list(offsets)):
            target = rn + offset
            if not 0 <= target < MAXROOMS:
                continue
            if not (same_row(rn, target) or same_col(rn, target)):
                continue
            other = self.rooms[target]
            if not other.is_room & _REAL:
                continue
            if same_row(rn, target):
                tunnel_dir = RIGHT if here.left_col < other.left_col else LEFT
            else:
                tunnel_dir = DOWN if here.top_row < other.top_row else UPWARD
            door_dir = (tunnel_dir + 4) % DIRS
            if other.doors[door_dir // 2].oth_room != NO_ROOM:
                continue
            found = None
            if do_rec_de and not did_this:
                found = self.mask_room(rn, Cell.TUNNEL)
            if found is None:
                srow = (here.top_row + here.bottom_row) // 2
                scol = (here.left_col + here.right_col) // 2
            else:
                srow, scol = found
            drow, dcol = self.put_door(other, door_dir)
            rooms_found += 1
            self.draw_simple_passage(srow, scol, drow, dcol, tunnel_dir)
            here.is_room = RoomKind.DEADEND
            self.dungeon[srow][scol] = Cell.TUNNEL
            if i < 3 and not did_this:
                did_this = True
                if dice.coin_toss():
                    continue
            if rooms_found < 2 and do_rec_de:
                self.recursive_deadend(rn, offsets, srow, scol)
            break

    def recursive_deadend(self, rn: int, offsets: Sequence[int], srow: int,
                          scol: int) -> None:
        """Carry dead-end passages on through neighbouring empty slots."""
        here = self.rooms[rn]
        here.is_room = RoomKind.DEADEND
        self.dungeon[srow][scol] = Cell.TUNNEL
        for offset in list(offsets):
            de = rn + offset
            if not 0 <= de < MAXROOMS:
                continue
            if not (same_row(rn, de) or same_col(rn, de)):
                continue
            other = self.rooms[de]
            if not other.is_room & RoomKind.NOTHING:
                continue
            drow = (other.top_row + other.bottom_row) // 2
            dcol = (other.left_col + other.right_col) // 2
            if same_row(rn, de):
                tunnel_dir = RIGHT if here.left_col < other.left_col else LEFT
            else:
                tunnel_dir = DOWN if here.top_row < other.top_row else UPWARD
            self.draw_simple_passage(srow, scol, drow, dcol, tunnel_dir)
            self.r_de = de
            self.recursive_deadend(de, offsets, drow, dcol)

    def mask_room(self, rn: int, mask: int) -> Optional[Tuple[int, int]]:
        """The first square of slot ``rn`` whose contents meet ``mask``, or None."""
        rm = self.rooms[rn]
        for i in range(rm.top_row, rm.bottom_row + 1):
            for j in range(rm.left_col, rm.right_col + 1):
                if self.dungeon[i][j] & mask:
                    return i, j
        return None

    def make_maze(self, r: int, c: int, tr: int, br: int, lc: int, rc: int) -> None:
        """Carve a maze from ``r``, ``c`` inside the given bounds."""
        dice = self.dice
        dirs = [UPWARD, DOWN, LEFT, RIGHT]
        self.dungeon[r][c] = Cell.TUNNEL
        if dice.rand_percent(33):
            for _ in range(10):
                t1 = dice.get_rand(0, 3)
                t2 = dice.get_rand(0, 3)
                dirs[t1], dirs[t2] = dirs[t2], dirs[t1]
        at = self._at
        tunnel = Cell.TUNNEL
        for direction in dirs:
            if direction == UPWARD:
                if (r - 1 >= tr and at(r - 1, c) != tunnel and at(r - 1, c - 1) != tunnel
                        and at(r - 1, c + 1) != tunnel and at(r - 2, c) != tunnel):
                    self.make_maze(r - 1, c, tr, br, lc, rc)
            elif direction == DOWN:
                if (r + 1 <= br and at(r + 1, c) != tunnel and at(r + 1, c - 1) != tunnel
                        and at(r + 1, c + 1) != tunnel and at(r + 2, c) != tunnel):
                    self.make_maze(r + 1, c, tr, br, lc, rc)
            elif direction == LEFT:
                if (c - 1 >= lc and at(r, c - 1) != tunnel and at(r - 1, c - 1) != tunnel
                        and at(r + 1, c - 1) != tunnel and at(r, c - 2) != tunnel):
                    self.make_maze(r, c - 1, tr, br, lc, rc)
            elif direction == RIGHT:
                if (c + 1 <= rc and at(r, c + 1) != tunnel and at(r - 1, c + 1) != tunnel
                        and at(r + 1, c + 1) != tunnel and at(r, c + 2) != tunnel):
                    self.make_maze(r, c + 1, tr, br, lc, rc)

    def hide_boxed_passage(self, row1: int, col1: int, row2: int, col2: int,
                           n: int) -> None:
        """Hide up to ``n`` tunnel squares in a box, from the third level on."""
        if self.cur_level <= 2:
            return
        if row1 > row2:
            row1, row2 = row2, row1
        if col1 > col2:
            col1, col2 = col2, col1
        h = row2 - row1
        w = col2 - col1
        if w < 5 and h < 5:
            return
        row_cut = 1 if h >= 2 else 0
        col_cut = 1 if w >= 2 else 0
        for _ in range(n):
            for _ in range(10):
                row = self.dice.get_rand(row1 + row_cut, row2 - row_cut)
                col = self.dice.get_rand(col1 + col_cut, col2 - col_cut)
                if self.dungeon[row][col] == Cell.TUNNEL:
                    self.dungeon[row][col] |= Cell.HIDDEN
                    break

    def mix_random_rooms(self) -> None:
        """Shuffle the order in which room slots are visited."""
        rooms = self.random_rooms
        for i in range(MAXROOMS):
            j = self.dice.get_rand(i, MAXROOMS - 1)
            rooms[i], rooms[j] = rooms[j], rooms[i]

    @property
    def needs_amulet(self) -> bool:
        """True when the level is deep enough to hold the amulet."""
        return self.cur_level >= AMULET_LEVEL


def get_exp_level(points: int) -> int:
    """The experience level reached with ``points``."""
    for i in range(MAX_EXP_LEVEL - 1):
        if LEVEL_POINTS[i] > points:
            return i + 1
    return MAX_EXP_LEVEL


def hp_raise(dice: Dice, wizard: bool = False) -> int:
    """Hit points gained on going up an experience level."""
    return 10 if wizard else dice.get_rand(3, 10)


def add_exp(fighter: Fighter, points: int, promotion: bool = True,
            dice: Optional[Dice] = None, wizard: bool = False) -> List[int]:
    """Add experience points; returns the experience levels newly reached."""
    fighter.exp_points += points
    if fighter.exp_points < LEVEL_POINTS[fighter.exp - 1]:
        return []
    new_exp = get_exp_level(fighter.exp_points)
    if fighter.exp_points > MAX_EXP:
        fighter.exp_points = MAX_EXP + 1
    if dice is None:
        dice = Dice()
    reached = []
    for level in range(fighter.exp + 1, new_exp + 1):
        reached.append(level)
        if promotion:
            hp = hp_raise(dice, wizard)
            fighter.hp_current += hp
            fighter.hp_max += hp
        fighter.exp = level
    return reached


def average_hp(fighter: Fighter, extra_hp: int = 0, less_hp: int = 0) -> Tuple[int, int]:
    """Real and effective hit points gained per level, in hundredths."""
    if fighter.exp == 1:
        return 0, 0
    levels = fighter.exp - 1
    real = _cdiv(((fighter.hp_max - extra_hp - INIT_HP) + less_hp) * 100, levels)
    effective = _cdiv((fighter.hp_max - INIT_HP) * 100, levels)
    return real, effective