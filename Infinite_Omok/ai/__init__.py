"""Candidate generation, position evaluation and move search."""
