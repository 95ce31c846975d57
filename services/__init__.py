"""
services/ - Query Layer
=======================
Dashboard read operations and the database seeder. Services combine
repository results and apply display formatting.
"""
