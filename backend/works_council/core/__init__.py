"""Core Layer — pure domain logic and the storage contracts it is written against.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Functions are pure and deterministic; the only async code is Protocol signatures

Design Decisions:
    - Functional core separated from imperative shell: services/ orchestrates IO
      around the ordering plans computed here
"""
