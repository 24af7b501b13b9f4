"""
Utilities Package

Helper functions used across the application:
- uploads: book payload parsing for JSON and multipart requests
"""
