"""HTTP surface for the assistant relay."""
