"""Page-side pieces: content extraction, overlay state and result rendering."""
