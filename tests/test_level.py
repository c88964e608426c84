import pytest

from rogueclone.core import (
    BIG_ROOM,
    COL1,
    DOWN,
    LEFT,
    MAX_EXP,
    MAXROOMS,
    MIN_ROW,
    NO_ROOM,
    NO_TRAP,
    RIGHT,
    ROGUE_COLUMNS,
    ROGUE_LINES,
    ROW1,
    UPWARD,
    Cell,
    Dice,
    Fighter,
    RoomKind,
)
from rogueclone.level import (
    Level,
    add_exp,
    average_hp,
    get_exp_level,
    hp_raise,
    same_col,
    same_row,
)


def make_level(seed=1, cur_level=0):
    return Level(Dice(seed), cur_level=cur_level)


def test_same_row_and_col():
    assert same_row(0, 2)
    assert not same_row(2, 3)
    assert same_col(0, 6)
    assert not same_col(0, 1)


@pytest.mark.parametrize("points,level", [
    (0, 1), (9, 1), (10, 2), (19, 2), (20, 3), (MAX_EXP - 1, 20), (MAX_EXP, 21),
])
def test_get_exp_level(points, level):
    assert get_exp_level(points) == level


def test_hp_raise():
    assert hp_raise(Dice(1), wizard=True) == 10
    dice = Dice(3)
    assert all(3 <= hp_raise(dice) <= 10 for _ in range(100))


def test_add_exp_promotes():
    fighter = Fighter()
    reached = add_exp(fighter, 10, True, Dice(1), wizard=True)
    assert reached == [2]
    assert fighter.exp == 2
    assert fighter.hp_max == fighter.hp_current == 22


def test_add_exp_without_promotion_keeps_hp():
    fighter = Fighter()
    reached = add_exp(fighter, 45, False, Dice(1))
    assert reached == [2, 3, 4]
    assert fighter.hp_max == 12


def test_add_exp_below_threshold():
    fighter = Fighter()
    assert add_exp(fighter, 5, True, Dice(1)) == []
    assert fighter.exp == 1
    assert fighter.exp_points == 5


def test_add_exp_caps_points():
    fighter = Fighter()
    add_exp(fighter, MAX_EXP * 3, False, Dice(1))
    assert fighter.exp_points == MAX_EXP + 1
    assert fighter.exp == 21


def test_average_hp():
    assert average_hp(Fighter(), 4, 2) == (0, 0)
    fighter = Fighter(exp=3, hp_max=22)
    real, effective = average_hp(fighter)
    assert real == effective
    real2, effective2 = average_hp(fighter, extra_hp=4)
    assert effective2 == effective
    assert real2 < real


def test_clear_resets_everything():
    level = make_level()
    level.dungeon[5][5] = Cell.TUNNEL
    level.rooms[0].is_room = RoomKind.ROOM
    level.rooms[0].doors[1].oth_room = 3
    level.traps[0].trap_type = 2
    level.clear()
    assert all(cell == Cell.NOTHING for row in level.dungeon for cell in row)
    assert all(rm.is_room == RoomKind.NOTHING for rm in level.rooms)
    assert all(d.oth_room == NO_ROOM for rm in level.rooms for d in rm.doors)
    assert all(t.trap_type == NO_TRAP for t in level.traps)
    assert len(level.dungeon) == ROGUE_LINES
    assert len(level.dungeon[0]) == ROGUE_COLUMNS


@pytest.mark.parametrize("seed", range(5))
def test_make_room_forced(seed):
    level = make_level(seed)
    level.make_room(0, 0, 0, 0)
    rm = level.rooms[0]
    assert rm.is_room == RoomKind.ROOM
    assert MIN_ROW <= rm.top_row and rm.bottom_row <= ROW1 - 1
    assert 0 <= rm.left_col and rm.right_col <= COL1 - 1
    assert rm.bottom_row - rm.top_row + 1 >= 4
    assert rm.right_col - rm.left_col + 1 >= 7
    g = level.dungeon
    assert g[rm.top_row][rm.left_col + 1] == Cell.HORWALL
    assert g[rm.top_row + 1][rm.left_col] == Cell.VERTWALL
    assert g[rm.top_row + 1][rm.left_col + 1] == Cell.FLOOR


def test_make_big_room():
    level = make_level(4)
    level.make_room(BIG_ROOM, 0, 0, 0)
    rm = level.rooms[0]
    assert rm.is_room == RoomKind.ROOM
    assert rm.right_col <= ROGUE_COLUMNS - 2
    assert rm.bottom_row <= ROGUE_LINES - 2


def test_connect_rooms_needs_rooms():
    level = make_level()
    assert level.connect_rooms(0, 1) is False


def test_connect_rooms_links_doors():
    level = make_level(7, cur_level=1)
    level.make_room(0, 0, 1, 3)
    level.make_room(1, 0, 1, 3)
    assert level.connect_rooms(0, 1) is True
    d0 = level.rooms[0].doors[RIGHT // 2]
    d1 = level.rooms[1].doors[LEFT // 2]
    assert d0.oth_room == 1 and d1.oth_room == 0
    assert (d0.oth_row, d0.oth_col) == (d1.door_row, d1.door_col)
    assert level.dungeon[d0.door_row][d0.door_col] == Cell.DOOR
    assert level.dungeon[d1.door_row][d1.door_col] == Cell.DOOR


def test_connect_rooms_not_adjacent_lines():
    level = make_level(2)
    level.make_room(0, 0, 4, 4)
    level.make_room(4, 0, 4, 4)
    assert level.connect_rooms(0, 4) is False


def test_put_door_on_top_wall():
    level = make_level(5, cur_level=1)
    level.make_room(4, 4, 4, 4)
    rm = level.rooms[4]
    row, col = level.put_door(rm, UPWARD)
    assert row == rm.top_row
    assert rm.left_col < col < rm.right_col
    assert level.dungeon[row][col] == Cell.DOOR
    assert (rm.doors[0].door_row, rm.doors[0].door_col) == (row, col)


def test_draw_simple_passage_straight():
    level = make_level(1, cur_level=1)
    level.draw_simple_passage(5, 10, 5, 20, RIGHT)
    assert all(level.dungeon[5][c] == Cell.TUNNEL for c in range(11, 20))
    assert level.dungeon[5][10] == Cell.NOTHING
    assert level.dungeon[5][20] == Cell.NOTHING


def test_draw_simple_passage_bent_is_connected():
    level = make_level(9, cur_level=1)
    level.draw_simple_passage(3, 20, 12, 30, DOWN)
    cells = {(r, c) for r in range(ROGUE_LINES) for c in range(ROGUE_COLUMNS)
             if level.dungeon[r][c] == Cell.TUNNEL}
    assert (4, 20) in cells
    assert (11, 30) in cells
    seen = {(4, 20)}
    stack = [(4, 20)]
    while stack:
        r, c = stack.pop()
        for nr, nc in ((r + 1, c), (r - 1, c), (r, c + 1), (r, c - 1)):
            if (nr, nc) in cells and (nr, nc) not in seen:
                seen.add((nr, nc))
                stack.append((nr, nc))
    assert seen == cells


def test_mask_room():
    level = make_level()
    level.make_room(0, 0, 0, 0)
    assert level.mask_room(0, Cell.TUNNEL) is None
    rm = level.rooms[0]
    level.dungeon[rm.top_row + 1][rm.left_col + 2] = Cell.TUNNEL
    assert level.mask_room(0, Cell.TUNNEL) == (rm.top_row + 1, rm.left_col + 2)


def test_make_maze_stays_in_bounds():
    level = make_level(11)
    tr, br, lc, rc = 8, 14, 27, 51
    level.make_maze(10, 35, tr, br, lc, rc)
    tunnels = [(r, c) for r in range(ROGUE_LINES) for c in range(ROGUE_COLUMNS)
               if level.dungeon[r][c] == Cell.TUNNEL]
    assert (10, 35) in tunnels
    assert len(tunnels) > 1
    assert all(tr <= r <= br and lc <= c <= rc for r, c in tunnels)


def test_hide_boxed_passage_shallow_does_nothing():
    level = make_level(1, cur_level=1)
    level.draw_simple_passage(5, 10, 5, 40, RIGHT)
    before = [row[:] for row in level.dungeon]
    level.hide_boxed_passage(5, 10, 5, 40, 3)
    assert level.dungeon == before


def test_hide_boxed_passage_hides_only_tunnels():
    level = make_level(1, cur_level=1)
    for c in range(10, 40):
        level.dungeon[5][c] = Cell.TUNNEL
    level.cur_level = 5
    level.hide_boxed_passage(5, 9, 5, 41, 3)
    hidden = [c for c in range(ROGUE_COLUMNS) if level.dungeon[5][c] & Cell.HIDDEN]
    assert hidden
    assert all(level.dungeon[5][c] == Cell.TUNNEL | Cell.HIDDEN for c in hidden)


def test_mix_random_rooms_is_permutation():
    level = make_level(3)
    for _ in range(5):
        level.mix_random_rooms()
        assert sorted(level.random_rooms) == list(range(MAXROOMS))


def test_fill_it_makes_deadend():
    level = make_level(13, cur_level=1)
    level.make_room(0, 0, 0, 0)
    rm3 = level.rooms[3]
    rm3.top_row, rm3.bottom_row, rm3.left_col, rm3.right_col = 8, 14, 0, 25
    rm3.is_room = RoomKind.NOTHING
    level.fill_it(3, False)
    assert rm3.is_room == RoomKind.DEADEND
    assert level.dungeon[11][12] == Cell.TUNNEL
    assert level.rooms[0].doors[DOWN // 2].door_row == level.rooms[0].bottom_row


@pytest.mark.parametrize("seed", range(8))
def test_make_level_invariants(seed):
    level = make_level(seed, cur_level=4)
    level.make_level(party_counter=0)
    assert level.cur_level == 5
    assert level.max_level == 5
    for index, rm in enumerate(level.rooms):
        for door in rm.doors:
            if door.oth_room != NO_ROOM:
                other = level.rooms[door.oth_room]
                assert any(d.oth_room == index for d in other.doors)
                cell = level.dungeon[door.door_row][door.door_col] & ~Cell.HIDDEN
                assert cell in (Cell.DOOR, Cell.TUNNEL)
    assert any(rm.is_room & RoomKind.ROOM for rm in level.rooms)


def test_make_level_stops_at_last_dungeon():
    level = make_level(2, cur_level=99)
    level.make_level(party_counter=0)
    assert level.cur_level == 99
    assert level.max_level == 99