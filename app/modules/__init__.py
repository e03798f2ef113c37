"""Domain modules: finance, wishlist and user profile services."""
