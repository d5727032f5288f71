#!/usr/bin/env python3
"""
Generate a signed shop session token for calling the API locally.
Usage: python scripts/create_session.py <shop-domain> <access-token>
"""

import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.auth import ShopSessionManager, SESSION_COOKIE_NAME
from app.config import settings


def main():
    if len(sys.argv) != 3:
        print("Usage: python scripts/create_session.py <shop-domain> <access-token>")
        sys.exit(1)

    shop, access_token = sys.argv[1], sys.argv[2]
    token = ShopSessionManager(settings.session_secret).create_token(shop, access_token)

    print("\nSend this with each request:\n")
    print(f"Authorization: Bearer {token}")
    print(f"\nor as the '{SESSION_COOKIE_NAME}' cookie.")
    print()


if __name__ == "__main__":
    main()
