# app/services/product_client.py
import requests

from app.domain.exceptions import NotFoundError
from app.utils.retry import http_retry
from app.utils.settings import PRODUCT_SERVICE_URL
from app.utils.logging import get_logger

logger = get_logger(__name__)


class ProductClient:
    """Catalogue lookups against the product service."""

    def __init__(self, base_url: str | None = None, timeout: int = 2):
        self.base_url = (base_url or PRODUCT_SERVICE_URL).rstrip("/")
        self.timeout = timeout

    @http_retry()
    def _get(self, url: str) -> requests.Response:
        return requests.get(url, timeout=self.timeout)

    def fetch_product(self, product_id: str) -> dict:
        url = f"{self.base_url}/products/{product_id}"
        logger.info(f"ProductClient GET {url}")

        resp = self._get(url)
        if resp.status_code == 404:
            raise NotFoundError(
                "Product not found. It may have been removed or is no longer available.",
                details={"productId": product_id},
            )
        resp.raise_for_status()
        return resp.json()
