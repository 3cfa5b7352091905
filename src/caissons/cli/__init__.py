"""Command line interface for caisson generation."""
