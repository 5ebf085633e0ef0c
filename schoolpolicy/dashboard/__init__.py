"""Role-gated dashboard content and sidebar navigation."""
