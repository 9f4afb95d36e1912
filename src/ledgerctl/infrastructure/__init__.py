"""Infrastructure layer — the in-memory Ledger that owns all account state.

Builds on the domain collections and adds ownership, locking, and
configuration-driven floors.  It must never import from services,
commands, or output.
"""
