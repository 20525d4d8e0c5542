"""
Relay domain logic: inbound payload validation shared by the API endpoints.
"""
