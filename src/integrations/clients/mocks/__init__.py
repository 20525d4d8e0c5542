"""
Mock integration clients.

These clients return fake (but realistic) responses without calling any external API.
They are used when:
- Vicidial or GoHighLevel credentials are not available on a dev machine
- We want to exercise the relay end-to-end without external dependencies

Important:
- Mock clients must follow the SAME interface as real HTTP clients.
- Mock clients should return data shaped like the real services respond.

Switching to real:
Unset INTEGRATIONS_MODE (or set it to "real"); src/api/dependencies.py then
builds clients/real_http/* implementations instead.
"""
