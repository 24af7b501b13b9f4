"""
Bookstore API

An online bookstore backend: user accounts with JWT authentication, a book
catalog with cover image uploads, and purchases paid through an external
payment gateway.
"""

__version__ = "1.0.0"
