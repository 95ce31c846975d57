"""
repositories/ - Data Access Layer
==================================
One repository per table. All SQL lives here; repositories borrow
connections from the injected Database and return typed records.
"""
