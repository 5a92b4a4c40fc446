"""Infrastructure Layer — database, record store, view cache, and logging.

Invariants:
    - Infrastructure never imports from core/ domain logic beyond types and errors
    - All store calls mapped to DatabaseError on failure

Design Decisions:
    - Thin adapters behind core/repository_protocols.py so services can be tested with fakes
"""
