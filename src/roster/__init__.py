"""Roster — multi-tenant employee directory.

Users register, log in with a bearer token, and manage the employee
records they own. Nobody ever sees another user's employees.
"""

__version__ = "0.1.0"
