"""Growtrack: cultivation tracking for genetics, batches and plants."""
