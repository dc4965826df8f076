"""Command line interface (``motia-studio``)."""
