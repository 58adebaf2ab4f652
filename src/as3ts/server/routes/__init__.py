"""Route builders for the conversion API."""
