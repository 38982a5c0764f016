"""Domain logic: store, form controller, views and loader."""
