"""Core Business Logic Module

This module provides the user management logic, independent of Flask.

Module Structure:
    - roles.py            : Role vocabulary and explication
    - validators.py       : UserRequest decoding, create/update validation
    - user_transformer.py : User -> API representation, sorted collections
    - user_service.py     : UserService (fetch, create, update, delete, list)
    - store/              : UserStore interface, in-memory and HTTP stores
    - audit.py            : Signed audit trail of user mutations
    - errors.py           : UserApiError hierarchy

Import explicitly when needed:
    from userapi.core.user_service import UserService
    from userapi.core.errors import UserApiError
"""
