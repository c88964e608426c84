import pytest

from rogueclone.core import (
    NO_ROOM,
    NO_TRAP,
    Dice,
    Door,
    Fighter,
    GameObject,
    IdEntry,
    IdStatus,
    RogueTime,
    Room,
    Trap,
)


def test_get_rand_within_bounds():
    dice = Dice(1)
    values = {dice.get_rand(3, 7) for _ in range(500)}
    assert values <= set(range(3, 8))
    assert values == set(range(3, 8))


def test_get_rand_reversed_bounds():
    dice = Dice(2)
    for _ in range(100):
        assert 2 <= dice.get_rand(9, 2) <= 9


def test_get_rand_single_value():
    assert Dice(3).get_rand(5, 5) == 5


def test_rand_percent_extremes():
    dice = Dice(4)
    assert all(dice.rand_percent(100) for _ in range(200))
    assert not any(dice.rand_percent(0) for _ in range(200))


def test_coin_toss_gives_both_sides():
    dice = Dice(5)
    results = {dice.coin_toss() for _ in range(200)}
    assert results == {True, False}


def test_same_seed_same_sequence():
    a = Dice(42)
    b = Dice(42)
    assert [a.get_rand(0, 1000) for _ in range(20)] == [
        b.get_rand(0, 1000) for _ in range(20)
    ]


def test_reseed_restarts_sequence():
    dice = Dice(7)
    first = [dice.get_rand(0, 1000) for _ in range(10)]
    dice.seed(7)
    assert [dice.get_rand(0, 1000) for _ in range(10)] == first


def test_monster_aliases_share_fields():
    mon = GameObject()
    mon.hp_to_kill = 25
    mon.m_char = "A"
    mon.m_hit_chance = 60
    assert mon.quantity == 25
    assert mon.ichar == "A"
    assert mon.obj_class == 60
    mon.damage = "1d3"
    assert mon.m_damage == "1d3"


def test_room_defaults():
    room = Room()
    assert len(room.doors) == 4
    assert all(d.oth_room == NO_ROOM for d in room.doors)
    room.doors[0].oth_room = 3
    assert Room().doors[0].oth_room == NO_ROOM


def test_trap_and_door_defaults():
    assert Trap().trap_type == NO_TRAP
    assert Door().oth_room == NO_ROOM


def test_fighter_pack_is_independent():
    a = Fighter()
    b = Fighter()
    a.pack.append(GameObject())
    assert b.pack == []
    assert a.hp_current == a.hp_max


def test_id_entry_default_unidentified():
    assert IdEntry().id_status == IdStatus.UNIDENTIFIED


def test_rogue_time_ordering():
    early = RogueTime(2020, 1, 2, 3, 4, 5)
    later = RogueTime(2020, 1, 2, 3, 4, 6)
    assert early < later
    assert RogueTime(2020, 1, 2, 3, 4, 5) == early


def test_rogue_time_is_frozen():
    t = RogueTime(2020, 1, 1, 0, 0, 0)
    with pytest.raises(AttributeError):
        t.year = 2021
    assert t.year == 2020