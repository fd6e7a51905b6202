"""
Infrastructure Layer

Adapters de persistencia (PostgreSQL via psycopg pool, e in-memory) para los
puertos CredentialStore y SessionStore.
"""
