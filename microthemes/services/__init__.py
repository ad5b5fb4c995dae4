"""Theme and microsite services."""
