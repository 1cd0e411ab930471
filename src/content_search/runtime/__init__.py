"""Runtime helpers for the HTTP app."""
