"""
Home Assistant REST API client.

Reads the state of one climate entity and invokes climate services with a
long-lived bearer token. Calls are fire-and-log: failures are logged and
reported through the return value, never raised, and never retried.
"""

from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from climate_bridge.models.climate import ClimateSnapshot, EntityState
from climate_bridge.models.commands import ServiceCall
from climate_bridge.utils.logging import get_logger

logger = get_logger(__name__)


class HubClient:
    """
    Home Assistant REST client for a single climate entity.

    Features:
    - Bearer token authentication
    - Entity state read (GET /api/states/{entity_id})
    - Service calls (POST /api/services/{domain}/{service})
    - Sim mode support
    """

    SIM_SNAPSHOT = ClimateSnapshot(
        state="cool",
        current_temperature=23.5,
        target_temperature=22.0,
        fan_mode="auto",
        preset_mode="none",
    )

    def __init__(
        self,
        base_url: str,
        token: str,
        entity_id: str,
        sim_mode: bool = False
    ):
        """
        Initialize hub client.

        Args:
            base_url: Hub base URL without trailing slash
            token: Long-lived access token
            entity_id: Climate entity to read
            sim_mode: If True, return fake data without API calls
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.entity_id = entity_id
        self.sim_mode = sim_mode

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }

    async def fetch_snapshot(self) -> Optional[ClimateSnapshot]:
        """
        Read the current state of the climate entity.

        Returns:
            ClimateSnapshot, or None on network error, non-2xx status or a
            malformed body
        """
        if self.sim_mode:
            logger.debug("[SIM] Fetching climate state", entity_id=self.entity_id)
            return self.SIM_SNAPSHOT

        url = f"{self.base_url}/api/states/{self.entity_id}"
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(url, headers=self.headers)
                response.raise_for_status()
                data = response.json()

            entity = EntityState.model_validate(data)

        except httpx.HTTPStatusError as e:
            logger.warning(
                "hub_state_fetch_failed",
                entity_id=self.entity_id,
                status_code=e.response.status_code,
            )
            return None
        except httpx.HTTPError as e:
            logger.warning(
                "hub_state_fetch_failed",
                entity_id=self.entity_id,
                error=f"{type(e).__name__}: {e}",
            )
            return None
        except (ValueError, ValidationError) as e:
            # json.JSONDecodeError is a ValueError
            logger.warning(
                "hub_state_malformed",
                entity_id=self.entity_id,
                error=str(e),
            )
            return None

        return ClimateSnapshot.from_entity_state(entity)

    async def call_service(
        self,
        domain: str,
        service: str,
        data: Dict[str, Any]
    ) -> bool:
        """
        Invoke a hub service. The response body is ignored.

        Args:
            domain: Service domain (e.g. "climate")
            service: Service name (e.g. "set_fan_mode")
            data: JSON payload, including entity_id

        Returns:
            True on a 2xx response, False on failure
        """
        if self.sim_mode:
            logger.info("[SIM] Hub service call", domain=domain, service=service, data=data)
            return True

        url = f"{self.base_url}/api/services/{domain}/{service}"
        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(url, headers=self.headers, json=data)
                response.raise_for_status()

        except httpx.HTTPStatusError as e:
            logger.warning(
                "hub_service_call_failed",
                service=f"{domain}.{service}",
                status_code=e.response.status_code,
            )
            return False
        except httpx.HTTPError as e:
            logger.warning(
                "hub_service_call_failed",
                service=f"{domain}.{service}",
                error=f"{type(e).__name__}: {e}",
            )
            return False

        logger.debug("hub_service_called", service=f"{domain}.{service}", data=data)
        return True

    async def execute(self, call: ServiceCall) -> bool:
        return await self.call_service(call.domain, call.service, call.data)
