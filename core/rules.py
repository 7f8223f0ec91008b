"""Per-script substitution tables.

Each script owns its character map and digraph table outright. Letter merges
differ between scripts (Younger Futhark folds g into k, d into th, and so on),
so no table is derived from another.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final

from core.models import RunicScript

# Punctuation that every script maps to itself.
PRESERVED: Final[str] = " .,!?'\"-:;"


@dataclass(frozen=True)
class RuleTable:
    script: RunicScript
    name: str
    chars: Mapping[str, str]
    digraphs: Mapping[str, str]


def _identity(marks: str) -> dict[str, str]:
    return {mark: mark for mark in marks}


ELDER_FUTHARK: Final[RuleTable] = RuleTable(
    script="elder_futhark",
    name="Elder Futhark",
    chars=MappingProxyType(
        {
            "f": "\u16A0",  # ᚠ fehu
            "u": "\u16A2",  # ᚢ uruz
            "v": "\u16A2",
            "þ": "\u16A6",  # þ -> ᚦ thurisaz
            "a": "\u16A8",  # ᚨ ansuz
            "r": "\u16B1",  # ᚱ raido
            "k": "\u16B2",  # ᚲ kauna
            "c": "\u16B2",
            "x": "\u16B2",
            "q": "\u16B2",
            "g": "\u16B7",  # ᚷ gebo
            "w": "\u16B9",  # ᚹ wunjo
            "h": "\u16BB",  # ᚻ haglaz
            "n": "\u16BE",  # ᚾ naudiz
            "i": "\u16C1",  # ᛁ isaz
            "j": "\u16C3",  # ᛃ jeran
            "y": "\u16C3",
            "ï": "\u16C7",  # ï -> ᛇ iwaz
            "p": "\u16C8",  # ᛈ perth
            "z": "\u16C9",  # ᛉ algiz
            "s": "\u16CA",  # ᛊ sowilo
            "t": "\u16CF",  # ᛏ tiwaz
            "b": "\u16D2",  # ᛒ berkanan
            "e": "\u16D6",  # ᛖ ehwaz
            "m": "\u16D7",  # ᛗ mannaz
            "l": "\u16DA",  # ᛚ laguz
            "ŋ": "\u16DC",  # ŋ -> ᛜ ingwaz
            "o": "\u16DF",  # ᛟ othalan
            "d": "\u16DE",  # ᛞ dagaz
            **_identity(PRESERVED),
        }
    ),
    digraphs=MappingProxyType(
        {
            "th": "\u16A6",  # ᚦ
            "ng": "\u16DC",  # ᛜ
        }
    ),
)

# Sixteen runes; the missing sounds are merged onto their nearest neighbour.
YOUNGER_FUTHARK: Final[RuleTable] = RuleTable(
    script="younger_futhark",
    name="Younger Futhark",
    chars=MappingProxyType(
        {
            "f": "\u16A0",  # ᚠ fe
            "u": "\u16A2",  # ᚢ ur
            "v": "\u16A2",
            "w": "\u16A2",
            "þ": "\u16A6",  # þ -> ᚦ thurs
            "d": "\u16A6",
            "a": "\u16A8",  # ᚨ oss
            "r": "\u16B1",  # ᚱ reid
            "k": "\u16B2",  # ᚲ kaun
            "c": "\u16B2",
            "g": "\u16B2",
            "x": "\u16B2",
            "q": "\u16B2",
            "h": "\u16BB",  # ᚻ hagall
            "n": "\u16BE",  # ᚾ naud
            "i": "\u16C1",  # ᛁ is
            "j": "\u16C1",
            "y": "\u16C1",
            "p": "\u16C8",  # ᛈ
            "s": "\u16CA",  # ᛊ sol
            "z": "\u16CA",
            "t": "\u16CF",  # ᛏ tyr
            "b": "\u16D2",  # ᛒ bjarkan
            "e": "\u16D6",  # ᛖ
            "m": "\u16D7",  # ᛗ madr
            "l": "\u16DA",  # ᛚ logr
            "o": "\u16DF",  # ᛟ
            **_identity(PRESERVED),
        }
    ),
    digraphs=MappingProxyType(
        {
            "th": "\u16A6",  # ᚦ
            "ng": "\u16BE",  # ᚾ
        }
    ),
)

# Angerthas glyphs live in the private use area; core.cirth_compat maps them
# onto standard runes when stored text is rendered.
CIRTH: Final[RuleTable] = RuleTable(
    script="cirth",
    name="Cirth (Angerthas)",
    chars=MappingProxyType(
        {
            "p": "\uE080",  # certh 1
            "b": "\uE081",  # 2
            "f": "\uE082",  # 3
            "v": "\uE083",  # 4
            "t": "\uE088",  # 9
            "d": "\uE089",  # 10
            "þ": "\uE08A",  # 11
            "k": "\uE090",  # 17
            "c": "\uE090",
            "q": "\uE090",
            "g": "\uE091",  # 18
            "h": "\uE092",  # 19
            "s": "\uE09C",  # 29
            "x": "\uE09C",
            "z": "\uE09D",  # 30
            "r": "\uE0A0",  # 33
            "l": "\uE0A8",  # 41
            "m": "\uE0B0",  # 49
            "n": "\uE0B4",  # 53
            "w": "\uE0B8",  # 57
            "j": "\uE0BC",  # 61
            "y": "\uE0BD",  # 62
            "i": "\uE0C8",  # 73
            "e": "\uE0C9",  # 74
            "a": "\uE0CA",  # 75
            "o": "\uE0CB",  # 76
            "u": "\uE0CC",  # 77
            **_identity(PRESERVED),
        }
    ),
    digraphs=MappingProxyType(
        {
            "th": "\uE08A",  # 11
            "ch": "\uE093",  # 20
            "sh": "\uE09E",  # 31
            "ng": "\uE0B5",  # 54
        }
    ),
)
