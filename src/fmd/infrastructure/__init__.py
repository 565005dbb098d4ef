"""Infrastructure layer: file reading and directory traversal.

Infrastructure may import from the domain layer, never the reverse.
"""
