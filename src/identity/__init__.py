"""Identity bounded context: users, authentication and authorization."""
