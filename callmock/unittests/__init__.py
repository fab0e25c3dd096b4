"""Unit tests for callmock."""
