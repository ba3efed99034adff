"""Data layer for cvmatch."""
