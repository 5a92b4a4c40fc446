"""Invoice Actions — validated create/update/delete handlers for dashboard invoices.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
