"""Rule variations that turn board positions into games."""

from snek.ruleset.base import Ruleset
from snek.ruleset.solo import SoloRuleset
from snek.ruleset.standard import StandardRuleset

__all__ = [
    "Ruleset",
    "SoloRuleset",
    "StandardRuleset",
]
