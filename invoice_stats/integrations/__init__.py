"""
Integrations Module
Clients for the external stores this service reads from.
"""
