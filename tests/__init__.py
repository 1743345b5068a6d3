"""
Test Suite for the Book Review API

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data)
- test_auth.py: /api/auth/* endpoints and bearer token handling
- test_books.py: /api/books/* endpoints
- test_reviews.py: review endpoints and book detail aggregation
- test_services.py: service functions called directly with a session
- test_config.py: settings validation

Running Tests:
    # Run all tests
    pytest

    # Run specific file
    pytest tests/test_books.py

    # Run with verbose output
    pytest -v
"""
