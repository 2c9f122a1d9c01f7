"""Cargo dependency metadata.

Loads the resolved dependency graph once per run through
`cargo metadata --format-version=1` and picks one package record per
dependency name when several versions are present.
"""
