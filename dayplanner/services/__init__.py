"""Scheduling engine components."""
