"""Extract and run ``@bot`` commands embedded in issue comments."""

from .parser import Command, Input, iter_commands

__all__ = ["Command", "Input", "iter_commands"]
