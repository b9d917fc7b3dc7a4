"""Business services sitting between the API layer and the repositories."""
