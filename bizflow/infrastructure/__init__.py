"""Infrastructure Layer - logging, properties files, message sources, transactions.

Invariants:
    - Implements the Protocols declared in core/boundary_protocols.py
    - SQLAlchemy and filesystem errors never leak unmapped past this layer
"""
