"""Plumbing shared by every bounded context."""
