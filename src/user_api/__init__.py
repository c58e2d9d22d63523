"""HTTP service for creating, updating and listing user records."""
