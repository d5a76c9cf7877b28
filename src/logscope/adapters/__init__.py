"""Adapters – concrete RecordStore implementations."""
