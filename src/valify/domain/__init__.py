"""Domain layer — type checkers and the rule registry.

This layer depends only on stdlib and :mod:`valify.errors`.
It must never import from schema, model, config, or plugins.
"""
