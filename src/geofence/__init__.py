"""Point-in-place geofencing engine."""
