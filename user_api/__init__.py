"""Client library for the user-management service used during login triggers."""
