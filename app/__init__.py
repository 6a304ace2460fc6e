"""LifeBlog backend application package."""
