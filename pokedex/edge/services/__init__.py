"""Service integrations for the edge."""
