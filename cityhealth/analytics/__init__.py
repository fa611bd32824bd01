"""
Usage analytics for smart suggestions.

Responsibilities:
- Record suggestion runs and dismissals as in-memory events.
- Aggregate events into timing, reason and dismissal summaries.
"""
