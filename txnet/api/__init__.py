"""HTTP API and push channel for txnet."""
