"""Built-in exploits."""

from armory.plugins.exploits.path_traversal import HTTPPathTraversal

__all__ = ["HTTPPathTraversal"]
