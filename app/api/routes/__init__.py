"""
API routes.

- matching: Diagnostic endpoints for team resolution, indexing, matching and
  the match failure review queue
"""
