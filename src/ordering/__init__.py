"""Ordering bounded context: orders, payment reconciliation and order endpoints."""
