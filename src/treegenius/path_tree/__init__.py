"""Hierarchy construction from flat path lists.

This module provides the node types of a path tree, the statistics gathered
while building one, and the cooperative builder that folds path entries into
a tree.
"""
