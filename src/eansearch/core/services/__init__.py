"""Services that compose adapters into the public API."""
