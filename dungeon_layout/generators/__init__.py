"""Layout generators."""
