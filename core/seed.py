from __future__ import annotations

from typing import Final

from core.models import Quote
from core.translit import transliterate

INITIAL_QUOTES: Final[tuple[tuple[str, str], ...]] = (
    (
        "The only way to do great work is to love what you do.",
        "Steve Jobs",
    ),
    ("Not all those who wander are lost.", "J.R.R. Tolkien"),
    ("In the middle of difficulty lies opportunity.", "Albert Einstein"),
    ("Be yourself; everyone else is already taken.", "Oscar Wilde"),
    (
        "The journey of a thousand miles begins with one step.",
        "Lao Tzu",
    ),
)


def initial_quotes(created_at: int) -> list[Quote]:
    """Build the starter set with every runic field pre-computed.

    Ids are provisional (1..n); stores assign their own. ``created_at`` is
    staggered by one millisecond so the newest-first ordering is stable.
    """
    quotes: list[Quote] = []
    for offset, (text, author) in enumerate(INITIAL_QUOTES):
        quotes.append(
            Quote(
                id=offset + 1,
                text_latin=text,
                author=author,
                runic_elder=transliterate(text, "elder_futhark"),
                runic_younger=transliterate(text, "younger_futhark"),
                runic_cirth=transliterate(text, "cirth"),
                created_at=created_at + offset,
            )
        )
    return quotes
