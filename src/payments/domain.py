"""Payments bounded context: hosted checkout sessions.

Starts checkout sessions at the payment gateway and keeps a record of each
one it started.
"""

from protean.domain import Domain

payments = Domain(name="payments")
