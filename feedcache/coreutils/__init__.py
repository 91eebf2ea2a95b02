"""Shared helpers: environment config, logging setup, clock."""
