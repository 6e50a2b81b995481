"""Persistence for the inventory ledger. SQLite is the only backend."""
