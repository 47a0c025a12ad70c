"""Authentication and authorization.

Learn: one authentication path and one authorization rule.
1. Users → email/password → signed JWT (24h), sent back as a Bearer
   token or the session cookie
2. Drinks → only the user who posted one may change or delete it

Every authenticated request resolves to a SessionClaim (id, username,
email) recovered from the token. Nothing is stored server-side.
"""
