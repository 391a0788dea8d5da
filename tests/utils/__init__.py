"""Test utilities: data generators and assertion helpers."""
