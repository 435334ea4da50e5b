"""Infrastructure Layer — database access, repositories, and cross-cutting concerns.

Invariants:
    - Repositories implement the Protocols in core/repository_protocols.py
    - Storage exceptions are mapped to core/errors.py types before leaving this layer

Design Decisions:
    - One repository module per aggregate for locality
"""
