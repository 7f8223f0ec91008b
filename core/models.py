from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Literal, TypeGuard

RunicScript = Literal["elder_futhark", "younger_futhark", "cirth"]
QuoteFilter = Literal["all", "favorites", "user_created", "system"]

SCRIPTS: Final[tuple[RunicScript, ...]] = ("elder_futhark", "younger_futhark", "cirth")
DEFAULT_SCRIPT: Final[RunicScript] = "elder_futhark"
QUOTE_FILTERS: Final[tuple[QuoteFilter, ...]] = (
    "all",
    "favorites",
    "user_created",
    "system",
)


@dataclass(frozen=True)
class Quote:
    id: int
    text_latin: str
    author: str
    runic_elder: str | None = None
    runic_younger: str | None = None
    runic_cirth: str | None = None
    is_user_created: bool = False
    is_favorite: bool = False
    created_at: int = 0

    def precomputed(self, script: RunicScript) -> str | None:
        """Stored runic text for ``script``, or None when it was never computed."""
        if script == "elder_futhark":
            return self.runic_elder
        if script == "younger_futhark":
            return self.runic_younger
        return self.runic_cirth


def is_script(value: str) -> TypeGuard[RunicScript]:
    return value in SCRIPTS


def is_quote_filter(value: str) -> TypeGuard[QuoteFilter]:
    return value in QUOTE_FILTERS
