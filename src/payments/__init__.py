"""Payments bounded context: hosted checkout sessions and the payment gateway."""
