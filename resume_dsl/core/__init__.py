"""
Core Business Logic
==================

Core business logic modules for resume DSL compilation.

Modules:
- dsl: validation, migration, token resolution and AST compilation
- mappers: per-section strategies converting resume data into AST section data
- service: theme-aware rendering entry points for persisted resumes
"""
