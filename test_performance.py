"""
Performance test script for /v1/quotes endpoint.

Reports p50, p95 and p99 latencies against a running server; p50 should be < 250ms.
Run with the API up: python test_performance.py
"""

import httpx
import time
import statistics
from datetime import date
from typing import List

API_URL = "http://localhost:8000"

PAYLOADS = [
    {
        "customer_name": "Jane Doe",
        "customer_age": 30,
        "vehicle_year": date.today().year,
        "vehicle_make": "Toyota"
    },
    {
        "customer_id": 1,
        "customer_name": "Maria Lopez",
        "customer_age": 39,
        "vehicle_year": 2021,
        "vehicle_make": "Toyota",
        "vehicle_has_anti_theft": True
    },
    {
        "customer_name": "Derek Chan",
        "customer_age": 24,
        "vehicle_year": 2019,
        "vehicle_make": "BMW",
        "vehicle_purchase_price": 68000,
        "credit_score": 590
    },
]

def time_request(client: httpx.Client, payload: dict) -> float:
    """Send one quote request and return elapsed milliseconds."""
    start = time.time()
    response = client.post(f"{API_URL}/v1/quotes", json=payload, timeout=10.0)
    elapsed_ms = (time.time() - start) * 1000
    response.raise_for_status()
    return elapsed_ms

def percentile(samples: List[float], pct: float) -> float:
    ordered = sorted(samples)
    index = min(len(ordered) - 1, int(round(pct / 100 * (len(ordered) - 1))))
    return ordered[index]

def run(iterations: int = 200):
    samples = []
    with httpx.Client() as client:
        for i in range(iterations):
            samples.append(time_request(client, PAYLOADS[i % len(PAYLOADS)]))

    print("=" * 60)
    print(f"Requests: {len(samples)}")
    print(f"Mean:     {statistics.mean(samples):.2f} ms")
    print(f"p50:      {percentile(samples, 50):.2f} ms")
    print(f"p95:      {percentile(samples, 95):.2f} ms")
    print(f"p99:      {percentile(samples, 99):.2f} ms")
    print("PASS" if percentile(samples, 50) < 250 else "FAIL: p50 above 250ms")

if __name__ == "__main__":
    run()
