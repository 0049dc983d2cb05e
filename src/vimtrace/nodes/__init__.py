"""Compute nodes for vimtrace."""
