"""Command line interface for depeche."""
