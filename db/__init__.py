"""
db/ - Store Layer
=================
Owns the PostgreSQL connection pool, the schema DDL, the error types
raised by the data-access layer and the placeholder seed rows.
"""
