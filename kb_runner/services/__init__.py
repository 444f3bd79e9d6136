"""Run history services."""
