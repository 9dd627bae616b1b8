"""HTTP surface for the action catalog."""
