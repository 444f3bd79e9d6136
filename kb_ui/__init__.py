"""Command-line interface and presenters for kadane-bench."""
