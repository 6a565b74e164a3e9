"""Frontends - user interfaces for Creator Studio."""
