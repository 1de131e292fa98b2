"""Snapshot detection, release selection and update planning."""
