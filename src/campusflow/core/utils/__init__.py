"""Shared utility helpers for Campus Flow core."""
