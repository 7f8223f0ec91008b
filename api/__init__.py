"""Runic Quotes API service package.

Provides the FastAPI application factory, typed dependencies, Redis-backed
quote and preference services, and the background backfill job built on top
of the transliteration engine in ``core``.
"""
