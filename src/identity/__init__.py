"""Identity bounded context: bearer-token verification."""
