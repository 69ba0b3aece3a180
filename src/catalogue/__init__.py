"""Catalogue bounded context: the Product aggregate, its repository and endpoints."""
