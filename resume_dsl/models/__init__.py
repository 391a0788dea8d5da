"""
Data Models
===========

Pydantic data models for DSL documents, resume documents and the compiled AST.

Models:
- schemas: DSL input, resume relations, resolved tokens, section data and AST models
"""
