# rogueclone

The game logic of a classic roguelike dungeon crawler, as a plain Python
library: the dungeon model, level generation with rooms, mazes and passages,
combat arithmetic, item identification and descriptions, an in-memory screen
with per-character colours, the message and status lines, option parsing, and
loading of the numbered message file the game takes its texts from.

It needs nothing outside the standard library and runs on Python 3.10 and
later.

## Modules

- `rogueclone.core`: constants of the game, the flag sets `Cell`, `ObjKind`,
  `InUse`, `RoomKind`, `MonsterFlag` and `Stat`, the enum `IdStatus`, the
  records `GameObject`, `Fighter`, `Door`, `Room`, `Trap`, `IdEntry` and
  `RogueTime`, and `Dice`, the random number source (`get_rand`,
  `rand_percent`, `coin_toss`, `seed`).
- `rogueclone.msgfile`: `parse_messages` and `read_messages` build the
  message table from lines such as `12 "Hello"`. Lines numbered outside 1 to
  499 are ignored; a numbered line without a pair of double quotes raises
  `MessageFileError`, as does a file that cannot be opened. Files are read as
  UTF-8, falling back to EUC-JP.
- `rogueclone.machdep`: `login_name` (`$FIGHTER`, the login name, `$USER`,
  or `"A FIGHTER"`), `home_directory`, `file_id`, `link_count`,
  `current_time`, `file_mtime`, `delete_file` and `make_seed`.
- `rogueclone.display`: `Screen`, a character grid with a cursor
  (`move`, `addch`, `mvaddch`, `addstr`, `mvaddstr`, `inch`, `clrtoeol`,
  `clear`, `line`); `ColorMap` and `ColorPair`, which map map characters to
  colour pairs from a colour string such as `"cbmyg"`; and the encoding
  helpers `utf8_len`, `eucjp_to_utf8` and `utf8_to_eucjp`.
- `rogueclone.msgline`: `Messenger` shows messages on the top line of a
  `Screen`, reads keys from any iterable of characters (`rgetchar`,
  `get_direction`, `get_input_line`, `input_line`), draws the status line
  with `print_stats` and dumps the screen with `save_screen`. Also `r_index`
  and `is_digit`.
- `rogueclone.hit`: `get_number`, `get_damage`, `get_w_damage`, `to_hit`,
  `damage_for_strength`, `get_dir_rc`, `get_hit_chance` and
  `get_weapon_damage`.
- `rogueclone.options`: `GameOptions.apply` reads a `ROGUEOPT`-style option
  string, `collect_env_options` joins `ROGUEOPTS` and `ROGUEOPT1` to
  `ROGUEOPT9`, `get_value` extracts one option value, and `parse_arguments`
  reads `[-s] [-r] message_file [save_file]`, raising `UsageError` otherwise.
- `rogueclone.level`: `Level` holds one dungeon map and generates it
  (`make_level`, `make_room`, `connect_rooms`, `add_mazes`, `fill_out_level`
  and more); `same_row`, `same_col`, `get_exp_level`, `hp_raise`, `add_exp`
  and `average_hp` handle the room grid and experience.
- `rogueclone.invent`: `IdTables` holds what the player knows about each
  kind of scroll, potion, wand, ring, weapon and armor, shuffles potion
  colours, makes up scroll titles, assigns wand materials and ring gems and
  lists discoveries; `get_desc` describes an object, `inventory_lines` lists
  a pack, and `znum` writes numbers in full-width digits.

## Examples

Dice notation and combat arithmetic:

```python
from rogueclone.core import Dice
from rogueclone.hit import get_number, get_damage, damage_for_strength

get_number("2d3")                         # 2
get_damage("1d4/2d6", randomize=False)    # 16, every die at its highest face
get_damage("2d3", Dice(7))                # a roll between 2 and 6
damage_for_strength(16)                   # 3
```

The nine room slots lie on a three by three grid:

```python
from rogueclone.level import Level, same_row, same_col, get_exp_level
from rogueclone.core import Dice

same_row(0, 2)      # True
same_col(1, 7)      # True
get_exp_level(0)    # 1

level = Level(Dice(42))
big_room = level.make_level(party_counter=5)
level.cur_level     # 1
level.dungeon       # 24 rows of 80 Cell flags
```

Describing an item:

```python
from rogueclone.core import GameObject, ObjKind
from rogueclone.invent import IdTables, get_desc

tables = IdTables()
tables.potions[2].title = "blue "
potion = GameObject(what_is=ObjKind.POTION, which_kind=2)
get_desc(potion, tables, "potion ")     # "a blue potion "
```

Options and arguments:

```python
from rogueclone.options import GameOptions, parse_arguments

options = GameOptions().apply("nojump,name=Hero")
options.jump, options.nick_name         # (False, "Hero")

args = parse_arguments(["-s", "mesg"])
args.message_file, args.score_only      # ("mesg", True)
```

Loading the game's texts:

```python
from rogueclone.msgfile import read_messages

messages = read_messages("mesg")        # messages[12] is the text numbered 12
```

## What the package does not do

There is no command to play the game and no main loop. The package does not
place monsters, objects, stairs or traps on a level, has no monster movement
or item use, no saving and restoring of games and no score file. `Screen` is
an in-memory grid: nothing is drawn to a real terminal, and `Messenger` reads
keys from whatever iterable it is given rather than from a keyboard.

## Tests

The tests run under pytest; install the `test` extra to get it.