"""HTTP API and search form."""
