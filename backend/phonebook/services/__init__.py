"""Services Layer — orchestration between routes, core rules and the store.

Invariants:
    - Services own transactions (commit/rollback); routes never commit
"""
