"""Runic transliteration engine.

Per-script rule tables, the table-driven transliterator with its script
registry, and the normalizer for legacy Cirth text. Pure functions over
immutable data; no I/O.
"""
