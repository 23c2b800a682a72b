from .linkage_tree import LinkageTree

__all__ = ["LinkageTree"]
