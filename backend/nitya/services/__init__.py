"""Services for the analytics engine."""
