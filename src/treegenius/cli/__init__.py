"""Command-line interface for treegenius."""
