"""Adapters package for dayswithout."""
