"""Configuration, logging, database and security plumbing."""
