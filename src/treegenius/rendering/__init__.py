"""Text and structured renderings of path trees."""
