from __future__ import annotations

import pytest

from core.cirth_compat import LEGACY_GLYPHS, has_private_use
from core.rules import CIRTH
from core.translit import transliterate


@pytest.mark.parametrize(
    ("latin", "expected"),
    [
        ("chain", "\uE093\uE0CA\uE0C8\uE0B4"),
        ("ship", "\uE09E\uE0C8\uE080"),
        ("ring", "\uE0A0\uE0C8\uE0B5"),
        ("ashing", "\uE0CA\uE09E\uE0C8\uE0B5"),
        ("gandalf", "\uE091\uE0CA\uE0B4\uE089\uE0CA\uE0A8\uE082"),
        (
            "khazad-dum",
            "\uE090\uE092\uE0CA\uE09D\uE0CA\uE089-\uE089\uE0CC\uE0B0",
        ),
    ],
)
def test_words(latin: str, expected: str) -> None:
    assert transliterate(latin, "cirth") == expected


def test_th_digraph_and_thorn_agree() -> None:
    assert transliterate("th", "cirth") == transliterate("þ", "cirth")
    assert len(transliterate("th", "cirth")) == 1


def test_sh_is_not_split() -> None:
    assert transliterate("sh", "cirth") != transliterate("s", "cirth") + transliterate(
        "h", "cirth"
    )


def test_output_is_private_use() -> None:
    out = transliterate("Moria", "cirth")
    assert has_private_use(out)
    assert all(0xE000 <= ord(c) <= 0xF8FF for c in out)


def test_every_cirth_glyph_has_a_legacy_mapping() -> None:
    produced = set(CIRTH.chars.values()) | set(CIRTH.digraphs.values())
    glyphs = {g for g in produced if 0xE000 <= ord(g) <= 0xF8FF}
    assert glyphs <= set(LEGACY_GLYPHS)
