"""
Lifecycle Simulation Script

Drives many concurrent orders through the full lifecycle against a
running server:

    customer OTP login -> place order -> pay -> partner picks up -> delivered

Uses the demo admin and delivery-partner accounts, so the server must be
running with SEED_DEMO_DATA=true and ENV_MODE=development (the OTP is read
from the send-otp response).

Run from project root: python scripts/simulate.py --orders 20

Version: 1.0.0
"""

import argparse
import asyncio
import random
import sys
import time
from datetime import datetime
from typing import Any, Optional

import httpx

API_BASE_URL = "http://localhost:8080"
TOTAL_ORDERS = 20
DEMO_PASSWORD = "password"
ADMIN_EMAIL = "admin@tiffin.com"
PARTNER_EMAIL = "john@delivery.com"

STREETS = ["MG Road", "Park Street", "Linking Road", "Brigade Road", "Anna Salai", "FC Road"]
INSTRUCTIONS = [None, "Extra raita", "Ring doorbell", "Leave at door", "Less spicy"]


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def random_phone() -> str:
    return f"+9198{random.randint(10000000, 99999999)}"


def random_items(dishes: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Pick 1-3 dishes from the menu with random quantities."""
    picked = random.sample(dishes, k=min(len(dishes), random.randint(1, 3)))
    return [
        {"dishId": d["id"], "name": d["name"], "price": d["price"], "quantity": random.randint(1, 3)}
        for d in picked
    ]


# =============================================================================
# API CALLS
# =============================================================================

async def password_login(client: httpx.AsyncClient, path: str, email: str) -> str:
    response = await client.post(path, json={"email": email, "password": DEMO_PASSWORD})
    response.raise_for_status()
    return response.json()["token"]


async def otp_login(client: httpx.AsyncClient, phone: str) -> str:
    response = await client.post("/api/auth/send-otp", json={"phone": phone})
    response.raise_for_status()
    code = response.json().get("otp")
    if not code:
        raise RuntimeError("Server does not expose OTP codes (run with ENV_MODE=development)")

    response = await client.post("/api/auth/verify-otp", json={"phone": phone, "otp": code})
    response.raise_for_status()
    return response.json()["token"]


async def set_status(client: httpx.AsyncClient, token: str, order_id: int, status: str) -> dict[str, Any]:
    response = await client.put(
        f"/api/orders/{order_id}/status",
        json={"status": status},
        headers=auth_headers(token),
    )
    response.raise_for_status()
    return response.json()["order"]


# =============================================================================
# SINGLE ORDER FLOW
# =============================================================================

async def run_order_flow(
    client: httpx.AsyncClient,
    order_num: int,
    dishes: list[dict[str, Any]],
    partner_token: str,
) -> dict[str, Any]:
    """Take one new customer's order from placement to delivery."""
    start_time = time.time()
    result: dict[str, Any] = {"order_num": order_num, "success": False}

    try:
        token = await otp_login(client, random_phone())

        response = await client.post(
            "/api/orders",
            json={
                "items": random_items(dishes),
                "deliveryAddress": f"{random.randint(1, 999)} {random.choice(STREETS)}",
                "paymentMethod": "RAZORPAY",
                "specialInstructions": random.choice(INSTRUCTIONS),
            },
            headers=auth_headers(token),
        )
        response.raise_for_status()
        order = response.json()["order"]
        result["order_id"] = order["id"]
        result["total"] = order["totalAmount"]

        response = await client.post(
            "/api/payments/create-order",
            json={"amount": order["totalAmount"]},
            headers=auth_headers(token),
        )
        response.raise_for_status()

        response = await client.post(
            "/api/payments/verify",
            json={
                "paymentId": f"pay_sim_{random.randint(100000, 999999)}",
                "orderId": f"order_{order['id']}",
                "signature": "simulated",
            },
            headers=auth_headers(token),
        )
        response.raise_for_status()

        await set_status(client, partner_token, order["id"], "OUT_FOR_DELIVERY")
        final = await set_status(client, partner_token, order["id"], "DELIVERED")

        result["success"] = final["status"] == "DELIVERED"
        result["status"] = final["status"]
    except (httpx.HTTPError, RuntimeError, KeyError) as e:
        result["error"] = str(e)[:100]

    result["time"] = round(time.time() - start_time, 3)
    return result


# =============================================================================
# MAIN SIMULATION RUNNER
# =============================================================================

async def preflight(client: httpx.AsyncClient) -> Optional[tuple[list[dict[str, Any]], str, str]]:
    """Check health, load the menu and sign in the demo admin and partner."""
    print("\n1️⃣ Health Check...")
    response = await client.get("/health")
    if response.status_code != 200:
        print(f"   ❌ Failed: {response.text}")
        return None
    print(f"   ✅ Status: {response.json().get('status')}")

    print("\n2️⃣ Menu...")
    response = await client.get("/api/menu/dishes")
    dishes = response.json() if response.status_code == 200 else []
    if not dishes:
        print("   ❌ No dishes available (is SEED_DEMO_DATA enabled?)")
        return None
    print(f"   ✅ {len(dishes)} dishes")

    print("\n3️⃣ Demo accounts...")
    try:
        admin_token = await password_login(client, "/api/auth/login", ADMIN_EMAIL)
        partner_token = await password_login(client, "/api/delivery/auth/login", PARTNER_EMAIL)
    except httpx.HTTPStatusError as e:
        print(f"   ❌ Login failed: {e.response.text[:100]}")
        return None
    print("   ✅ Admin and delivery partner signed in")

    return dishes, admin_token, partner_token


async def run_simulation(num_orders: int = TOTAL_ORDERS, base_url: str = API_BASE_URL) -> dict[str, Any]:
    print("=" * 70)
    print("🍛 LIFECYCLE SIMULATION")
    print("=" * 70)
    print(f"📋 Total Orders: {num_orders}")
    print(f"🎯 Target: {base_url}")
    print(f"⏰ Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    async with httpx.AsyncClient(base_url=base_url, timeout=30.0) as client:
        ready = await preflight(client)
        if ready is None:
            print("\n❌ Pre-flight checks failed.")
            return {"total": num_orders, "successful": 0, "failed": num_orders}
        dishes, admin_token, partner_token = ready

        print("\n🚀 Firing orders...\n")
        start_time = time.time()
        results = await asyncio.gather(*[
            run_order_flow(client, i + 1, dishes, partner_token) for i in range(num_orders)
        ])
        total_time = round(time.time() - start_time, 2)

        response = await client.get("/api/delivery/stats", headers=auth_headers(partner_token))
        partner_stats = response.json() if response.status_code == 200 else {}
        response = await client.get("/api/admin/stats", headers=auth_headers(admin_token))
        admin_stats = response.json() if response.status_code == 200 else {}

    successful = [r for r in results if r["success"]]
    failed = [r for r in results if not r["success"]]

    print("\n" + "=" * 70)
    print("📊 SIMULATION RESULTS")
    print("=" * 70)
    print(f"\n✅ Delivered Orders: {len(successful)}/{num_orders}")
    print(f"❌ Failed Orders: {len(failed)}/{num_orders}")
    print(f"⏱️  Total Time: {total_time}s")

    if successful:
        avg_time = round(sum(r["time"] for r in successful) / len(successful), 3)
        print("\n📈 Performance Metrics:")
        print(f"   Average Flow: {avg_time}s")
        print(f"   Fastest: {min(r['time'] for r in successful)}s")
        print(f"   Slowest: {max(r['time'] for r in successful)}s")
        print(f"   💰 Order Value: {sum(r.get('total', 0) for r in successful):.2f}")

    if failed:
        print("\n⚠️  Failed Order Details (showing first 5):")
        for f in failed[:5]:
            print(f"   Order #{f['order_num']}: {f.get('error', 'Unknown error')}")

    print("\n🚚 Partner stats:", partner_stats)
    print("📊 Admin stats:", admin_stats)
    print("=" * 70)

    return {
        "total": num_orders,
        "successful": len(successful),
        "failed": len(failed),
        "total_time": total_time,
        "results": results,
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Order lifecycle simulation")
    parser.add_argument("--orders", type=int, default=TOTAL_ORDERS, help="Number of orders")
    parser.add_argument("--url", default=API_BASE_URL, help="API base URL")
    args = parser.parse_args()

    summary = asyncio.run(run_simulation(args.orders, args.url))
    sys.exit(0 if summary["failed"] == 0 else 1)


if __name__ == "__main__":
    main()
