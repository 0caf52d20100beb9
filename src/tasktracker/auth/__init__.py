"""Authentication and authorization.

Learn: One authentication path: username/password → bcrypt check →
short-lived JWT. The JWT's subject is the user id, and it becomes the
"current identity" used to scope every task query to its owner.
"""
