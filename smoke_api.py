#!/usr/bin/env python3
"""Quick smoke check against a running pricing API.

Usage:
    python smoke_api.py [BASE_URL]     (default http://localhost:8000)
"""

import json
import sys

import requests

DEFAULT_URL = "http://localhost:8000"


def main():
    api_url = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_URL

    print("=" * 60)
    print(f"Smoke testing pricing API at {api_url}")
    print("=" * 60)
    print()

    # 1. Health check
    print("1. Health check...")
    try:
        health = requests.get(f"{api_url}/health", timeout=10)
        print(f"   ✓ Status: {health.status_code}")
        print(f"   ✓ Response: {health.json()}")
    except Exception as e:
        print(f"   ✗ Failed: {e}")
        sys.exit(1)
    print()

    # 2. Current pricing config
    print("2. Getting pricing config...")
    try:
        resp = requests.get(f"{api_url}/pricing", timeout=10)
        config = resp.json()["config"]
        print(f"   ✓ Status: {resp.status_code}")
        print(f"   ✓ Target margin: {config['targetMargin']}")
        print(f"   ✓ Labor rate: ${config['laborRatePerHour']}/h")
    except Exception as e:
        print(f"   ✗ Failed: {e}")
        sys.exit(1)
    print()

    # 3. HOA serviceability (always approved)
    print("3. HOA serviceability check...")
    try:
        resp = requests.post(
            f"{api_url}/serviceability",
            json={
                "address": "100 Example Way Fairfax VA 22030",
                "customerType": "HOA",
                "latitude": 38.8462,
                "longitude": -77.3064,
            },
            timeout=10,
        )
        data = resp.json()["data"]
        print(f"   ✓ Status: {resp.status_code}")
        print(f"   ✓ Recommendation: {data['recommendation']} at ${data['suggestedPrice']}")
    except Exception as e:
        print(f"   ✗ Failed: {e}")
        sys.exit(1)
    print()

    # 4. Single-family serviceability
    print("4. Single-family serviceability check...")
    try:
        resp = requests.post(
            f"{api_url}/serviceability",
            json={
                "address": "3910 Chain Bridge Rd Fairfax VA 22030",
                "customerType": "Single-Family",
                "latitude": 38.8480,
                "longitude": -77.3070,
                "numberOfCarts": 2,
            },
            timeout=10,
        )
        data = resp.json()["data"]
        print(f"   ✓ Status: {resp.status_code}")
        print(f"   ✓ Recommendation: {data['recommendation']}")
        print(f"   ✓ Suggested price: ${data['suggestedPrice']}")
        print(f"   ✓ Nearest customer: {data['nearestCustomerDistance']} ({data['driveTimeMinutes']} min)")
    except Exception as e:
        print(f"   ✗ Failed: {e}")
        sys.exit(1)
    print()

    # 5. Community pricing
    print("5. Pricing a 120-home community...")
    try:
        resp = requests.post(
            f"{api_url}/pricing",
            json={
                "communityName": "Smoke Test Estates",
                "locationName": "Fairfax, VA",
                "homes": 120,
                "unitType": "Single Family Homes",
                "isGated": True,
            },
            timeout=30,
        )
        body = resp.json()
        data = body["data"]
        print(f"   ✓ Status: {resp.status_code}")
        print(f"   ✓ Price per unit: ${data['pricing']['pricePerUnit']:.2f}")
        print(f"   ✓ Margin: {data['pricing']['marginPercent'] * 100:.1f}%")
        print(f"   ✓ Recommendation: {data['recommendation']['recommendationType']}")
        print(f"   ✓ Legacy keys: {sorted(body['legacy'])}")
        print(f"   ✓ Size: ~{len(json.dumps(body)):,} chars")
    except Exception as e:
        print(f"   ✗ Failed: {e}")
        sys.exit(1)
    print()

    # 6. Validation error shape
    print("6. Invalid pricing request (expects 400)...")
    try:
        resp = requests.post(
            f"{api_url}/pricing",
            json={"communityName": "", "locationName": "Fairfax, VA", "homes": 0},
            timeout=10,
        )
        body = resp.json()
        print(f"   ✓ Status: {resp.status_code}")
        print(f"   ✓ Code: {body['code']}")
        print(f"   ✓ Fields: {[d['field'] for d in body.get('details', [])]}")
    except Exception as e:
        print(f"   ✗ Failed: {e}")
        sys.exit(1)
    print()

    print("=" * 60)
    print("Smoke test complete")
    print("=" * 60)


if __name__ == "__main__":
    main()
