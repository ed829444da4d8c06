"""GraphQL API for the body metrics engine."""
