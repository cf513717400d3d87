"""Barcode product lookup service."""

import asyncio
import logging
from dataclasses import dataclass

from pantry_tracker.adapters.openfoodfacts_client import ProductClient
from pantry_tracker.domain.errors import ProductLookupError, ProductNotFoundError

UNKNOWN_PRODUCT = "Unknown Product"

_logger = logging.getLogger(__name__)


@dataclass
class ProductLookupService:
    """Resolve scanned codes to product names."""

    client: ProductClient
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def lookup_name(self, code: str) -> str:
        """Return the product name for a scanned code.

        Raises ProductNotFoundError when the code is unknown and
        ProductLookupError when the lookup itself fails.
        """
        cleaned = code.strip()
        if not cleaned:
            raise ProductNotFoundError("Scanned code is empty")
        payload = await self._call_with_retry(cleaned)
        if payload.get("status") != 1:
            raise ProductNotFoundError(f"Product {cleaned} not found")
        product = payload.get("product")
        if not isinstance(product, dict):
            return UNKNOWN_PRODUCT
        name = product.get("product_name")
        return str(name).strip() if name else UNKNOWN_PRODUCT

    async def _call_with_retry(self, code: str) -> dict[str, object]:
        attempt = 0
        while True:
            try:
                payload = await self.client.get_product(code)
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "Product lookup failed (attempt %s/%s): %s",
                    attempt,
                    self.retry_attempts + 1,
                    exc,
                )
                if attempt > self.retry_attempts:
                    msg = "Failed to fetch product details."
                    raise ProductLookupError(msg) from exc
                await asyncio.sleep(self.retry_delay_seconds)
                continue
            if not isinstance(payload, dict):
                raise ProductLookupError("Unexpected product lookup response")
            return payload
