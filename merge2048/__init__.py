"""The 2048 sliding-tile puzzle: board logic, accounts, save files and terminal front ends."""

__version__ = "0.1.0"
__all__ = ["accounts", "app", "board", "classic"]