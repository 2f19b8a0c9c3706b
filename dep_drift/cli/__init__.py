"""Command line interface for DepDrift."""
