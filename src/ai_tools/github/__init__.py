"""GitHub access: reference parsing, credentials and the REST client."""
