"""ArtDrop imaging services."""
