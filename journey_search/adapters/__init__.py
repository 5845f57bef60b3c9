"""Adapters layer - Concrete implementations of ports.

Connects the search core to external systems:
- Booking API (location directory, schedule search)
- Transliteration (pinyin, accent folding)
- Caching (in-memory, null)
"""
