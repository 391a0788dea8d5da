"""
Test Suite
==========

Test suite matching the resume_dsl/ package structure.

Test Categories:
- unit: Unit tests for individual components
"""
