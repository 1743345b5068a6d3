"""
API Routers Package

Router Structure:
- auth.py: /api/auth/* endpoints (signup, login, current user)
- books.py: /api/books/* endpoints
- reviews.py: /api/books/{id}/reviews and /api/reviews/* endpoints

Each router is imported and registered in main.py.
"""

from bookreview.routers.auth import router as auth_router
from bookreview.routers.books import router as books_router
from bookreview.routers.reviews import router as reviews_router

__all__ = [
    "auth_router",
    "books_router",
    "reviews_router",
]
