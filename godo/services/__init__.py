"""
Services for godo.

launch/ holds the build-and-exec pipeline, packages/ the read-only
inspection of Go source trees.
"""
