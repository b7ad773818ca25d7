"""Mesh generators."""
