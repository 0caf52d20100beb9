"""TaskTracker — a personal to-do list behind a token-authenticated REST API.

Users register, log in for a short-lived bearer token, and manage tasks
that only they can see, toggle, or delete.
"""

__version__ = "0.1.0"
