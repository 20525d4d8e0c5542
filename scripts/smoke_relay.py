#!/usr/bin/env python3
"""
Smoke test for a running relay: add-lead, update-lead, call status, CRM contact.

Start the API first (in another terminal), ideally against mock clients:
  python scripts/run_relay.py --mock

Then run this script:
  python scripts/smoke_relay.py
  python scripts/smoke_relay.py --base-url http://127.0.0.1:3000 --phone +15551234567

If you see "Connection refused", the API is not running — start it as above.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Dict

import requests


def post_json(url: str, data: Dict[str, Any], timeout: int = 30) -> Dict[str, Any]:
    r = requests.post(url, json=data, timeout=timeout)
    print(f"   HTTP {r.status_code}")
    return r.json()


def main() -> int:
    parser = argparse.ArgumentParser(description="Smoke test the relay endpoints")
    parser.add_argument("--base-url", default="http://localhost:3000", help="Relay base URL")
    parser.add_argument("--phone", default="+15551234567", help="Phone number to submit")
    args = parser.parse_args()
    base = args.base_url.rstrip("/")

    print("=== Relay smoke test ===\n")
    print(f"Base URL: {base}\n")

    print("1) POST /api/vici/add-lead")
    try:
        out = post_json(f"{base}/api/vici/add-lead", {"phoneNumber": args.phone, "firstName": "Smoke", "lastName": "Test"})
    except requests.RequestException as e:
        print(f"   FAIL: {e}")
        if "Connection refused" in str(e) or "Failed to establish" in str(e):
            print("   → Start the API first: python scripts/run_relay.py --mock")
        return 1
    print(f"   {out}\n")
    lead_id = (out.get("result") or {}).get("lead_id")

    if lead_id:
        print("2) POST /api/vici/update-lead")
        out = post_json(
            f"{base}/api/vici/update-lead",
            {"leadId": lead_id, "phoneNumber": args.phone, "firstName": "Smoke", "lastName": "Updated"},
        )
        print(f"   {out}\n")
    else:
        print("2) Skipping update-lead (no lead_id in add-lead result)\n")

    print("3) POST /api/ghl/contacts")
    out = post_json(
        f"{base}/api/ghl/contacts",
        {"phone_number": args.phone.lstrip("+"), "first_name": "Smoke", "last_name": "Test", "lead_id": lead_id or ""},
    )
    print(f"   {out}\n")

    print("4) POST /api/vicidial-call-status")
    out = post_json(
        f"{base}/api/vicidial-call-status",
        {"lead_id": lead_id, "phone_number": args.phone.lstrip("+"), "status": "SALE", "agent": "smoke"},
    )
    print(f"   {out}\n")

    print("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
