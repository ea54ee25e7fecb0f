"""Post-processing of generated content."""
