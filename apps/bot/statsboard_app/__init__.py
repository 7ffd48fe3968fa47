"""Discord stats dashboard bot entrypoints."""
