"""Router smoke test script.

Posts a sample Upptime alert to a running router and prints the response.

Usage:
    python scripts/send_test_alert.py http://localhost:8000 <ROUTER_SECRET>
"""

import asyncio
import sys

import httpx

DEFAULT_ROUTER_URL = "http://localhost:8000"

SAMPLE_PAYLOAD = {
    "data": {
        "message": "🟥 NEAR 1Click (https://1click.chaindefuser.com/v0/tokens) is **down** : "
        "Smoke test alert, please ignore.",
    }
}


async def send_test_alert(base_url: str, key: str) -> bool:
    """Send the sample alert.

    Args:
        base_url: router base URL
        key: router secret

    Returns:
        whether the router answered 200 or 204
    """
    print(f"🔌 Router: {base_url}")

    timeout = httpx.Timeout(10.0, connect=5.0)
    async with httpx.AsyncClient(timeout=timeout) as client:
        try:
            health = await client.get(f"{base_url}/healthz")
            print(f"   /healthz -> {health.status_code}")
        except httpx.ConnectError as e:
            print(f"   ❌ connection failed: {e}")
            return False

        response = await client.post(
            f"{base_url}/api/notifyRouter",
            params={"key": key},
            json=SAMPLE_PAYLOAD,
        )
        print(f"   /api/notifyRouter -> {response.status_code} {response.text[:200]!r}")
        return response.status_code in (200, 204)


def main() -> None:
    if len(sys.argv) < 3:
        print(__doc__)
        sys.exit(2)
    ok = asyncio.run(send_test_alert(sys.argv[1].rstrip("/") or DEFAULT_ROUTER_URL, sys.argv[2]))
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
