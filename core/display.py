from __future__ import annotations

from core.cirth_compat import normalize_legacy_glyphs
from core.models import Quote, RunicScript
from core.translit import transliterate


def runic_text(quote: Quote, script: RunicScript) -> str:
    """Runic text to show for ``quote`` in ``script``.

    Quotes without a stored field are transliterated on demand. Whatever the
    source, the rendered text goes through the legacy normalizer, so Cirth is
    always shown as standard runes whether or not the field was stored.
    """
    stored = quote.precomputed(script)
    text = stored if stored is not None else transliterate(quote.text_latin, script)
    return normalize_legacy_glyphs(text)
