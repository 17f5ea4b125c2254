"""Seed a component and issue tracker with demo data."""
