"""Core of animal-votes: domain, contracts, configuration and services."""
