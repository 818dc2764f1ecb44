"""Core Business Logic Module

This module holds the pieces the user API clients are composed from,
independent of any trigger or HTTP framework.

Module Structure:
    - users/      : Lookup and management clients, transport, exceptions
    - models.py   : User, Role and UserAttributes records
    - codec.py    : User <-> JSON wire format
    - uri.py      : Request URI construction
    - result.py   : Response classification and Ok/Failure result values
    - secrets.py  : Secret readers and the credential provider

Usage Pattern:
    Import explicitly when needed:
        from user_api.core.users import UserLookupClient, UserManagementClient
        from user_api.core.codec import decode_user, encode_user
"""
