"""Shared helpers used across the trigger context package."""
