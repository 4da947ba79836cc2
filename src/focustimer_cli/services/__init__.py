"""Service layer for focustimer CLI."""
