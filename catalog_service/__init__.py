"""Catalog Service: a fixed product list behind a cached HTTP endpoint."""
