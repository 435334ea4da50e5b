"""Services Layer — membership handlers, council resolution, and the engine facade.

Invariants:
    - Handlers split by concern: single members, bulk members, reorder
    - Handlers talk to storage only through the Protocols in core/repository_protocols.py

Design Decisions:
    - MembershipEngine composes the handlers explicitly (no auto-discovery)
"""
