"""Compatibility layer for Cirth text stored by earlier releases.

Older data encoded Cirth with private use area codepoints (U+E080 and up)
that the bundled runic fonts do not cover. ``normalize_legacy_glyphs`` maps
those onto the standard Runic block so stored quotes render again.
"""
from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

PUA_START: Final[int] = 0xE000
PUA_END: Final[int] = 0xF8FF

LEGACY_GLYPHS: Final[Mapping[str, str]] = MappingProxyType(
    {
        "\uE080": "\u16C8",  # p
        "\uE081": "\u16D2",  # b
        "\uE082": "\u16A0",  # f
        "\uE083": "\u16A1",  # v
        "\uE088": "\u16CF",  # t
        "\uE089": "\u16DE",  # d
        "\uE08A": "\u16A6",  # th
        "\uE090": "\u16B2",  # k
        "\uE091": "\u16B7",  # g
        "\uE092": "\u16BA",  # h
        "\uE093": "\u16E3",  # ch
        "\uE09C": "\u16CB",  # s
        "\uE09D": "\u16C9",  # z
        "\uE09E": "\u16CC",  # sh
        "\uE0A0": "\u16B1",  # r
        "\uE0A8": "\u16DA",  # l
        "\uE0B0": "\u16D7",  # m
        "\uE0B4": "\u16BE",  # n
        "\uE0B5": "\u16DC",  # ng
        "\uE0B8": "\u16B9",  # w
        "\uE0BC": "\u16C3",  # j
        "\uE0BD": "\u16A4",  # y
        "\uE0C8": "\u16C1",  # i
        "\uE0C9": "\u16D6",  # e
        "\uE0CA": "\u16A8",  # a
        "\uE0CB": "\u16DF",  # o
        "\uE0CC": "\u16A2",  # u
    }
)

_TRANSLATION: Final[dict[int, str]] = str.maketrans(dict(LEGACY_GLYPHS))


def has_private_use(text: str) -> bool:
    return any(PUA_START <= ord(char) <= PUA_END for char in text)


def has_legacy_glyphs(text: str) -> bool:
    return any(char in LEGACY_GLYPHS for char in text)


def normalize_legacy_glyphs(text: str) -> str:
    """Replace legacy Cirth glyphs with standard runes.

    Text without any private use codepoint is returned as the same object.
    Private use codepoints outside the legacy table are kept unchanged.
    """
    if not has_private_use(text):
        return text
    return text.translate(_TRANSLATION)
