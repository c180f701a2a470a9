from __future__ import annotations

import sys
from pathlib import Path

# Allow running as: python scripts/users_smoketest.py
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from fastapi.testclient import TestClient

from user_api.main import create_app


def main() -> int:
    c = TestClient(create_app())

    r = c.get("/api/users")
    print("/api/users(seeded)", r.status_code, len(r.json()))

    r = c.post("/api/users", json={"name": "  Smoke Test ", "email": "SMOKE@Example.com "})
    print("POST /api/users", r.status_code, r.json())
    if r.status_code != 201:
        return 1
    user_id = r.json()["id"]

    r = c.put(f"/api/users/{user_id}", json={"name": "Smoke Test 2", "email": "smoke2@example.com"})
    print(f"PUT /api/users/{user_id}", r.status_code, r.json())

    r = c.delete(f"/api/users/{user_id}")
    print(f"DELETE /api/users/{user_id}", r.status_code)

    r = c.get(f"/api/users/{user_id}")
    print(f"GET /api/users/{user_id}(after delete)", r.status_code)

    return 0 if r.status_code == 404 else 1


if __name__ == "__main__":
    raise SystemExit(main())
