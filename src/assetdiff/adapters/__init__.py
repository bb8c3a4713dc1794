"""Adapters connecting the domain to storage, files and inventories."""
