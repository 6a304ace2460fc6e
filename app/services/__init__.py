from app.services.auth import AuthService
from app.services.blog import BlogListQuery, BlogPage, BlogService
from app.services.contact import ContactService
from app.services.user import UserPage, UserService

__all__ = [
    "AuthService",
    "BlogListQuery",
    "BlogPage",
    "BlogService",
    "ContactService",
    "UserPage",
    "UserService",
]
