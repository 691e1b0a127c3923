"""Routing — hierarchical pattern broker mapping request paths to page data."""
