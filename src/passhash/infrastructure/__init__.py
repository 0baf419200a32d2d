"""Infrastructure — concrete collaborators for the session services."""
