"""JotDB command-line interface."""
