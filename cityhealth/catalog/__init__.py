"""
Offline provider catalog.

Responsibilities:
- Load the bundled provider snapshot used when no backend is connected.
- Normalize raw rows into the canonical Candidate schema.
- Serve verified providers, capped, as a candidate source for suggestions.
"""
