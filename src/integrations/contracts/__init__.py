"""
Contracts (data models).

This folder defines the request/response shapes for the relay's integrations:
- Dialer (Vicidial) lead requests and parsed text responses
- CRM (GoHighLevel) contact requests
- Call status events posted back by the dialer

Both mock and real HTTP clients should use these contracts.
"""
