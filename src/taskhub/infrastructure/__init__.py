"""
Infrastructure
==============

Adapters to external systems (database).
"""
