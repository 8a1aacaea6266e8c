"""Segment model, layout generation and template loading."""
