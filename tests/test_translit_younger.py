from __future__ import annotations

import pytest

from core.translit import create, transliterate


def test_king_uses_naudiz_for_ng() -> None:
    # Younger Futhark has no ingwaz; ng collapses to a single n rune
    assert transliterate("king", "younger_futhark") == "ᚲᛁᚾ"


def test_thorn_covers_th_and_d() -> None:
    assert transliterate("th", "younger_futhark") == "ᚦ"
    assert transliterate("d", "younger_futhark") == "ᚦ"
    assert transliterate("þ", "younger_futhark") == "ᚦ"


@pytest.mark.parametrize(
    ("group", "rune"),
    [
        ("kcgxq", "ᚲ"),
        ("ijy", "ᛁ"),
        ("uvw", "ᚢ"),
        ("sz", "ᛊ"),
    ],
)
def test_merged_letters_share_one_rune(group: str, rune: str) -> None:
    t = create("younger_futhark")
    for letter in group:
        assert t.transliterate(letter) == rune


def test_sentence() -> None:
    assert transliterate("Wander, gods!", "younger_futhark") == "ᚢᚨᚾᚦᛖᚱ, ᚲᛟᚦᛊ!"


def test_differs_from_elder_where_letters_merge() -> None:
    assert transliterate("gift", "younger_futhark") != transliterate(
        "gift", "elder_futhark"
    )
    # letters that both alphabets keep apart agree
    assert transliterate("maf", "younger_futhark") == transliterate(
        "maf", "elder_futhark"
    )
