"""
Configuration Management
=======================

Environment-based configuration using Pydantic Settings.

Components:
- settings: Application settings and compiler limits
- logging: Structured logging configuration
"""
