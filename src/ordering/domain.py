"""Ordering bounded context: orders and payment reconciliation.

Turns a paid checkout session into exactly one order and adjusts the
catalogue's stock for it.
"""

from protean.domain import Domain

ordering = Domain(name="ordering")
