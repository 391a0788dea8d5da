"""
DSL Processing Module
====================

Resume DSL validation, migration and compilation.

Components:
- validator: Cerberus schema validation and normalization
- migrations: version migration chain
- tokens: semantic design token resolution
- compiler: DSL to AST compilation
- merge: theme deep-merge
- loader: JSON/YAML text loading
"""
