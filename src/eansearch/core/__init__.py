"""Core of the client: domain models, contracts, configuration and the facade."""
