"""TrackGuard command-line interface."""
