"""Tests for letterle."""
