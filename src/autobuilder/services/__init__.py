"""Service layer - business logic on top of repositories and clients."""
