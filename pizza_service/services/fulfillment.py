"""
Order fulfillment through the external pizza factory.

Every placed order is forwarded to the factory exactly once:

    POST {FACTORY_URL}/api/order
    Authorization: Bearer {FACTORY_API_KEY}
    {"diner": {"id", "name", "email"}, "order": {...}}

The factory answers with a signed proof of purchase (``jwt``) and a
``reportUrl``. A non-2xx answer or any transport problem is a failed
fulfillment. There is no retry, and the caller keeps the stored order either
way.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from .. import config
from ..authorization import Principal
from ..schemas.orders import OrderOut

logger = logging.getLogger(__name__)


@dataclass
class FulfillmentResult:
    ok: bool
    jwt: Optional[str] = None
    report_url: Optional[str] = None
    message: Optional[str] = None


class FactoryClient:
    """Synchronous client for the pizza factory order endpoint."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url if base_url is not None else config.FACTORY_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else config.FACTORY_API_KEY
        self.timeout = timeout if timeout is not None else config.FACTORY_TIMEOUT_SECONDS

    @property
    def order_url(self) -> str:
        return f"{self.base_url}/api/order"

    def fulfill(self, diner: Principal, order: OrderOut) -> FulfillmentResult:
        body = {
            "diner": {"id": diner.id, "name": diner.name, "email": diner.email},
            "order": order.model_dump(by_alias=True, mode="json"),
        }
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

        logger.debug("Sending order %s to factory", order.id)
        try:
            response = requests.post(
                self.order_url,
                json=body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("Factory request for order %s failed: %s", order.id, e)
            return FulfillmentResult(ok=False, message=str(e))

        payload = self._json(response)
        result = FulfillmentResult(
            ok=response.ok,
            jwt=payload.get("jwt"),
            report_url=payload.get("reportUrl"),
            message=payload.get("message"),
        )
        if result.ok:
            logger.info("Factory accepted order %s", order.id)
        else:
            logger.warning(
                "Factory rejected order %s (status %s): %s",
                order.id, response.status_code, result.message,
            )
        return result

    @staticmethod
    def _json(response: requests.Response) -> Dict[str, Any]:
        try:
            payload = response.json()
        except ValueError:
            return {}
        return payload if isinstance(payload, dict) else {}
