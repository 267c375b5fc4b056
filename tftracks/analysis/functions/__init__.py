"""Building blocks of the track extraction pipeline."""
