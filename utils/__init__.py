"""
utils/ - Cross-cutting helpers
==============================
Logging, display formatting and password hashing.
"""
