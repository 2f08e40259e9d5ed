"""
Simple simulator: send a few sensor observations to the API.
Run:
    python scripts/simulate_sensor.py
"""
import os
import time
import random
import requests

API = os.getenv("API_URL", "http://localhost:8000")

def main():
    product_id = "LETTUCE-001"
    for i in range(5):
        body = {
            "productId": product_id,
            "temp": round(random.uniform(2, 18), 2),
            "humidity": round(random.uniform(60, 95), 2),
            "pH": round(random.uniform(5.8, 7.2), 2),
            "bacterialCount": random.randint(0, 400_000),
            "location": random.choice(["Cold Room #1", "Truck CM-102", "Warehouse CM"]),
        }
        rr = requests.post(f"{API}/api/data", json=body)
        print("observation", i, rr.status_code, rr.text)
        time.sleep(1)

    rr = requests.get(f"{API}/api/validate")
    print("validate:", rr.status_code, rr.text)

    rr = requests.get(f"{API}/api/products/{product_id}")
    print("records:", rr.json()["count"])

if __name__ == "__main__":
    main()
