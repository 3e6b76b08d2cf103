"""Upstream data access: MLB Stats API client, expiring caches and the stats service."""
