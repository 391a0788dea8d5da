"""
Resume DSL Compiler
===================

Compiles declarative, versioned resume-styling documents (the DSL) into a fully
resolved, renderer-agnostic layout tree (the AST).

This package provides:
- Pydantic models for the DSL, resume documents, and the compiled AST
- Schema validation and version migration of raw DSL documents
- Design token resolution and page geometry computation
- Per-section mapping strategies for resume data
- A rendering service that merges persisted themes before compiling
"""

__version__ = "1.0.0"
__author__ = "Resume DSL Team"
