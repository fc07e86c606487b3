"""Authentication.

Learn: Two pieces. Credentials (bcrypt password hashes, signed JWT
bearer tokens) and the identity resolver that turns an Authorization
header into a Principal. Every employee route depends on the resolver;
only register and login are open.
"""
