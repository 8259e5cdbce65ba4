"""Command line interface for tabbytui."""
