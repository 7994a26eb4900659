"""Domain services for WhaleScope."""
