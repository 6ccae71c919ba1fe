"""Seed script — creates demo users via the REST API.

Usage:
    python scripts/seed.py              # uses http://localhost:8000
    python scripts/seed.py http://host  # custom base URL
"""

import sys

import httpx

BASE_URL = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8000"

USERS = [
    {"username": "alice", "email": "alice@example.com", "password": "password123"},
    {"username": "bob", "email": "bob@example.com", "password": "password123"},
    {"username": "carol", "email": "carol@example.org", "password": "password123"},
]

INACTIVE = ["carol"]


def create_user(client: httpx.Client, user: dict) -> None:
    resp = client.post(f"{BASE_URL}/api/users", json=user)
    if resp.status_code == 201:
        print(f"  Created {user['username']} ({resp.json()['id']})")
    elif resp.status_code == 409:
        print(f"  {user['username']} already exists, skipping")
    else:
        resp.raise_for_status()


def deactivate(client: httpx.Client, username: str) -> None:
    resp = client.get(f"{BASE_URL}/api/users/username/{username}")
    resp.raise_for_status()
    user_id = resp.json()["id"]
    client.patch(f"{BASE_URL}/api/users/{user_id}/deactivate").raise_for_status()
    print(f"  Deactivated {username}")


def main() -> None:
    print(f"Seeding against {BASE_URL}\n")

    with httpx.Client(timeout=10) as client:
        print("Users:")
        for user in USERS:
            create_user(client, user)

        print("\nDeactivations:")
        for username in INACTIVE:
            deactivate(client, username)

    print("\nDone!")


if __name__ == "__main__":
    main()
