"""Point records and session state."""
