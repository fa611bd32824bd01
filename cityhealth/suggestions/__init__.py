"""
Smart suggestion engine.

Responsibilities:
- Score each candidate provider against the query, the user location and its
  static features (ratings, emergency service, amenities).
- Keep the top positive-scoring providers, best first, with a display reason.
- Hold one display context's current suggestions and its dismissal flag.
"""
