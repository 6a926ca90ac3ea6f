from __future__ import annotations

import hmac

from .config import DASHBOARD_PASSWORD, DASHBOARD_USERNAME


def login_required(password: str = DASHBOARD_PASSWORD) -> bool:
    return bool(password)


def check_credentials(
    username: str,
    password: str,
    expected_username: str = DASHBOARD_USERNAME,
    expected_password: str = DASHBOARD_PASSWORD,
) -> bool:
    if not expected_password:
        return True
    user_ok = hmac.compare_digest((username or "").encode("utf-8"), expected_username.encode("utf-8"))
    pass_ok = hmac.compare_digest((password or "").encode("utf-8"), expected_password.encode("utf-8"))
    return user_ok and pass_ok
