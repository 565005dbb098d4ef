"""Domain layer: frontmatter, metadata queries, and filter logic.

This layer depends only on stdlib, pydantic and ruamel.yaml.
It must never import from services, infrastructure, commands, or config.
"""
