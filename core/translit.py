from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final, Protocol, assert_never

from core.models import SCRIPTS, RunicScript
from core.rules import CIRTH, ELDER_FUTHARK, YOUNGER_FUTHARK, RuleTable


class Transliterator(Protocol):
    def transliterate(self, text: str) -> str: ...


class RuleTransliterator:
    """Table-driven Latin to runic transliterator.

    Input is lower-cased first, then scanned left to right: at each position
    the longest digraph key that matches wins, otherwise the single character
    goes through the character map. Characters missing from the map are kept
    as they are, which is how digits, symbols and non-Latin text survive.
    """

    def __init__(self, table: RuleTable) -> None:
        self._table = table
        self._chars = table.chars
        self._digraphs = table.digraphs
        self._widths = sorted({len(key) for key in table.digraphs}, reverse=True)

    @property
    def script(self) -> RunicScript:
        return self._table.script

    @property
    def script_name(self) -> str:
        return self._table.name

    @property
    def table(self) -> RuleTable:
        return self._table

    def transliterate(self, text: str) -> str:
        folded = text.lower()
        out: list[str] = []
        pos = 0
        end = len(folded)
        while pos < end:
            for width in self._widths:
                rune = self._digraphs.get(folded[pos : pos + width])
                if rune is not None:
                    out.append(rune)
                    pos += width
                    break
            else:
                char = folded[pos]
                out.append(self._chars.get(char, char))
                pos += 1
        return "".join(out)


def _build(script: RunicScript) -> RuleTransliterator:
    # A script without a table here fails type checking via assert_never.
    match script:
        case "elder_futhark":
            return RuleTransliterator(ELDER_FUTHARK)
        case "younger_futhark":
            return RuleTransliterator(YOUNGER_FUTHARK)
        case "cirth":
            return RuleTransliterator(CIRTH)
        case _:
            assert_never(script)


_REGISTRY: Final[Mapping[RunicScript, RuleTransliterator]] = MappingProxyType(
    {script: _build(script) for script in SCRIPTS}
)


def create(script: RunicScript) -> RuleTransliterator:
    """Return the shared transliterator for ``script``."""
    trans = _REGISTRY.get(script)
    if trans is None:
        raise ValueError(
            f"Runic script '{script}' not supported. "
            f"Available scripts: {', '.join(SCRIPTS)}"
        )
    return trans


def transliterate(text: str, script: RunicScript) -> str:
    return create(script).transliterate(text)


def transliterate_all(text: str) -> dict[RunicScript, str]:
    """Render ``text`` in every script, in declaration order."""
    return {script: _REGISTRY[script].transliterate(text) for script in SCRIPTS}


def script_name(script: RunicScript) -> str:
    return create(script).script_name
