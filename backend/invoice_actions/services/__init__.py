"""Services Layer — the invoice action pipeline, its form adapter, and read queries.

Invariants:
    - Services call core/ for every decision and infrastructure/ for every IO
    - One write per action; reads never write

Design Decisions:
    - Pipeline and form adapter split: previous form state never reaches the pipeline
"""
