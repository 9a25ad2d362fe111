"""HTTP client for fetching subscription files."""

import httpx
import structlog

from src.config.user_agent import DEFAULT_USER_AGENT

logger = structlog.get_logger(__name__)


class SubscriptionFetchError(Exception):
    """Raised when a subscription URL cannot be fetched."""


class SubscriptionClient:
    """구독 URL에서 설정 파일 원문을 가져오는 클라이언트.

    파싱은 하지 않습니다. 원문은 그대로 저장되고 재조정 시마다 다시 파싱됩니다.
    """

    def __init__(self, timeout_seconds: float = 30.0) -> None:
        """Initialize SubscriptionClient.

        Args:
            timeout_seconds: Total request timeout.
        """
        self._timeout = timeout_seconds

    async def fetch(self, url: str) -> str:
        """Fetch the raw subscription text.

        Args:
            url: Subscription URL.

        Returns:
            Response body as text.

        Raises:
            SubscriptionFetchError: Network error or non-2xx response.
        """
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                headers={"User-Agent": DEFAULT_USER_AGENT},
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "subscription_fetch_http_error",
                url=url,
                status_code=e.response.status_code,
            )
            raise SubscriptionFetchError(
                f"Subscription returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            logger.warning("subscription_fetch_failed", url=url, error=str(e))
            raise SubscriptionFetchError(f"Failed to fetch subscription: {e}") from e

        logger.info("subscription_fetched", url=url, size=len(response.text))
        return response.text
