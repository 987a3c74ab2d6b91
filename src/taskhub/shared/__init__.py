"""
Shared Kernel Module
====================

Generic infrastructure used by every resource router (users, tasks).

DO NOT add user or task business logic to the shared kernel.
"""
