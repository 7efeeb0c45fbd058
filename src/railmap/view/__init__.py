"""Camera transform and gesture handling."""
