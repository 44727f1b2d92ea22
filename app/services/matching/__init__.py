"""
Event Matching Service

Resolves raw team names from a prediction market and from bookmakers into
canonical identities, and matches markets to bookmaker events.

Key components:
- Name normalizer: normalized names, slugs and order-independent team set keys
- Team resolver: tiered raw name → official name resolution
- Canonicalizer: title parsing and canonical events
- Book index: bookmaker rows keyed by "{League}|{team_set_key}"
- Poly matcher: index lookup, time window filter and failure taxonomy
- Fuzzy matcher: alias tables and Levenshtein scoring with confidence
- Team mapping cache: operator corrections, highest priority everywhere
- Orchestrator: one polling cycle plus the self-healing loop
"""
