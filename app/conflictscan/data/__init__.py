"""Bundled data files for conflictscan."""
