"""Provisioning settings."""
