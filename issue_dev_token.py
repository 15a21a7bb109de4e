"""
Script to issue a bearer token for local development.

Only useful when the API runs with AUTH_PROVIDER=jwt; the token is signed with
JWT_SECRET_KEY and its subject becomes the owner of any jobs created with it.

Run this script from the project root:
    python issue_dev_token.py <user-id> [expires-in-minutes]
"""

import os
import sys
from datetime import timedelta

# Add jobloom to Python path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from jobloom.core.config import settings
from jobloom.core.security import create_access_token


def main(argv):
    if len(argv) < 2:
        print(__doc__)
        return 1

    user_id = argv[1]
    minutes = int(argv[2]) if len(argv) > 2 else settings.ACCESS_TOKEN_EXPIRE_MINUTES

    if settings.AUTH_PROVIDER.lower() != "jwt":
        print(f"Warning: AUTH_PROVIDER is '{settings.AUTH_PROVIDER}', the API will reject this token.", file=sys.stderr)

    print(create_access_token(user_id, expires_delta=timedelta(minutes=minutes)))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
