"""Domain layer.

Business logic of the body metrics engine, independent from the GraphQL
presentation and the infrastructure.
"""
