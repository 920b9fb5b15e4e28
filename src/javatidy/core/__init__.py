"""
Core Package.

Contains the refactoring backend:
- Java declaration tree and parser
- Modifier model and canonical order table
- Edit staging store and applier
- Rule engine, rules and the multi-pass engine
- Preview surface
"""
