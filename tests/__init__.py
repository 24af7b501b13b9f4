"""
Test Suite for the Bookstore API

Test Organization:
- conftest.py: Shared fixtures (test database, client, users, books)
- test_auth.py / test_auth_service.py: registration and login
- test_security.py / test_dependencies.py: hashing, JWT, the auth header
- test_books.py / test_book_service.py: catalog endpoints and rules
- test_purchases.py / test_payments.py: buying and the payment gateway
- test_errors.py: the error envelope
- test_end_to_end.py: the full register-to-purchase flow

Running Tests:
    pip install -e ".[test]"
    pytest -v
"""
