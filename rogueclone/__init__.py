"""Game logic for a classic dungeon-crawling roguelike: dungeon model, level
generation, combat arithmetic, item descriptions, screen and message line."""

__version__ = "6.0.0"