"""Frame rendering, hit regions, route overlay and drawing surfaces."""
