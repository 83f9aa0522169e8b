"""Services built on top of the API client."""
