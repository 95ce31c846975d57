"""
models/ - Records
=================
Dataclasses for the four tables and for the rows the dashboard views consume.
"""
