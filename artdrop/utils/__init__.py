"""Utility modules for ArtDrop."""
