"""Read-only HTTP viewer for saved session documents."""
