"""Hand a freshly issued recovery code to whatever delivers it to the admin."""
import logging

import httpx

from berry_admin.config import settings

logger = logging.getLogger(__name__)


def deliver_reset_code(email: str, code: str) -> bool:
    """POST the code to the configured webhook (mailer). Returns True if delivered."""
    logger.info("Password reset code issued for %s", email)
    if not settings.reset_code_webhook_url:
        return False
    try:
        r = httpx.post(
            settings.reset_code_webhook_url,
            json={"email": email, "code": code},
            timeout=10.0,
        )
        r.raise_for_status()
    except httpx.HTTPError:
        logger.exception("Reset code delivery failed for %s", email)
        return False
    return True
