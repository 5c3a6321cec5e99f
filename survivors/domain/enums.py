"""Enums and value objects used across the domain."""
from enum import Enum


class CharacterClass(str, Enum):
    PUGILIST = "pugilist"
    BERSERKER = "berserker"
    ELEMENTALIST = "elementalist"
    TRAPPER = "trapper"
    BEASTMASTER = "beastmaster"
    NECROMANCER = "necromancer"

    @staticmethod
    def values() -> list:
        return [c.value for c in CharacterClass]


class Race(str, Enum):
    HUMAN = "human"
    PRIMAL = "primal"
    HALF_ELF = "halfElf"
    GOBLIN = "goblin"

    @staticmethod
    def values() -> list:
        return [r.value for r in Race]


class RateWindow(str, Enum):
    BURST = "burst"
    DAILY = "daily"
