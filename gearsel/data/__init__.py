"""Packaged sample catalog datasets."""
