"""Prompt templates and rendering for generation operations."""
