"""File and directory conversion helpers."""
