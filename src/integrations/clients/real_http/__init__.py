"""
Real HTTP integration clients.

These clients communicate with the real external systems via httpx:
- Vicidial non-agent API (vicidial.py)
- GoHighLevel contacts API (gohighlevel.py)

Important:
- Must implement the same interfaces as the mock clients
  (src/integrations/contracts/interfaces.py)
- Must never log credentials or API keys

Switching:
The selection of mock vs real clients happens in src/api/dependencies.py only.
"""
