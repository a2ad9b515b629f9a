"""Business services: diagnosis engine, reference data, history, admin accounts."""
