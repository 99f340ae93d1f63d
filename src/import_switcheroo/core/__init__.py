"""
Core Package.

Contains the rewrite machinery:
- Source backend (lexer, parser, printer, tree nodes)
- Import matching and rewrite planning
- Migration engine, results and tracing
"""
