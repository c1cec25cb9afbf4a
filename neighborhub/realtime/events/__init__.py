"""Domain publishers: build a camelCase payload and hand it to the router."""
