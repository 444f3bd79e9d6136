"""Presenters turning engine and analytics output into tables."""
