"""Experiment module package for running configured measurement studies.

Provides YAML configuration loading, the runner persisting results, and the
per-algorithm summary table.
"""
