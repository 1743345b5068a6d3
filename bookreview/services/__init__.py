"""
Services Package

Business logic kept separate from HTTP handling. Every function takes the
SQLAlchemy session as its first argument and raises the exceptions in
bookreview.exceptions.

Current services:
- auth.py: Signup, login, and bearer token -> Identity
- books.py: Book store with creator-only mutation
- catalog.py: Book detail and public search
- reviews.py: Review rules, average rating and paginated listings
- security.py: Password hashing and JWT utilities
"""
