"""User management API package.

To use the Flask app:
    from userapi.flask_app import create_app

To use the user service without Flask:
    from userapi.core.user_service import UserService
    from userapi.core.store import InMemoryUserStore
"""
