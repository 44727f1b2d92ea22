"""
Services module for event matching business logic.

- matching: Team resolution, canonical event keys, bookmaker indexing and
  poly-to-book matching
"""
