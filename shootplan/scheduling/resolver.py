"""
Location resolution for the schedule optimizer.

Maps each scene to a location group (building / area) and a specific real
location through an injected LocationResolver, so the scheduling logic itself
never touches the network.
"""

import asyncio
from typing import Any, Protocol

import httpx
import structlog

from shootplan.scheduling.classification import UNDECIDED
from shootplan.scheduling.models import LocationResolution, Scene

logger = structlog.get_logger()

UNKNOWN_PREFIX = "unknown_scene_"
UNGROUPED_PREFIX = "ungrouped_"


class LocationResolver(Protocol):
    """Anything that can look up where a scene is shot."""

    async def resolve(self, scene: Scene, project_id: str) -> LocationResolution | None:
        """Return the scene's location, None when the registry has no entry.

        May raise on transport or data errors; callers fall back to an
        unknown group.
        """
        ...


def unknown_resolution(scene: Scene) -> LocationResolution:
    """Synthetic singleton group for a scene whose location could not be resolved."""
    key = f"{UNKNOWN_PREFIX}{scene.scene_number}"
    return LocationResolution(
        location_group_id=key,
        real_location_id=key,
        group_name=UNDECIDED,
        real_location_name=UNDECIDED,
        resolved=False,
    )


def _ref(value: Any) -> tuple[str, str]:
    """Read an `{_id, name}` reference (or a bare id string) from the registry."""
    if isinstance(value, str):
        return value, ""
    if isinstance(value, dict):
        ref_id = value.get("_id") or value.get("id") or ""
        name = value.get("name") or ""
        return (str(ref_id), str(name)) if ref_id else ("", "")
    return "", ""


def parse_registry_payload(payload: Any) -> LocationResolution | None:
    """
    Parse the registry's `{ realLocationId: {_id, name, locationGroupId: {_id, name}} }`.

    Returns None when no real location is assigned or the payload is malformed.
    A real location without a group becomes its own `ungrouped_<id>` group.
    """
    if not isinstance(payload, dict):
        logger.warning("Malformed registry payload", payload_type=type(payload).__name__)
        return None

    real_location = payload.get("realLocationId")
    real_id, real_name = _ref(real_location)
    if not real_id:
        return None

    group_id, group_name = ("", "")
    if isinstance(real_location, dict):
        group_id, group_name = _ref(real_location.get("locationGroupId"))

    if not group_id:
        logger.warning("Real location has no group", real_location_id=real_id)
        group_id, group_name = f"{UNGROUPED_PREFIX}{real_id}", "빈 group"

    return LocationResolution(
        location_group_id=group_id,
        real_location_id=real_id,
        group_name=group_name,
        real_location_name=real_name,
    )


class HttpLocationResolver:
    """Resolver backed by the project's location registry HTTP API."""

    def __init__(
        self,
        base_url: str,
        access_token: str = "",
        timeout: float = 5.0,
        max_retries: int = 2,
        backoff_base: float = 0.5,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.headers = {"Accept": "application/json"}
        if access_token:
            self.headers["Authorization"] = f"Bearer {access_token}"
        self.timeout = timeout
        self.max_retries = max_retries
        self.backoff_base = backoff_base
        self._client = client

    async def _get(self, url: str) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(url, headers=self.headers, timeout=self.timeout)
        async with httpx.AsyncClient() as client:
            return await client.get(url, headers=self.headers, timeout=self.timeout)

    async def resolve(self, scene: Scene, project_id: str) -> LocationResolution | None:
        """
        Look up the real location of a scene.

        Transport errors and 5xx responses are retried with exponential
        backoff; a 404 means the scene has no real location assigned.

        Raises:
            httpx.HTTPError: If the registry keeps failing after all retries
        """
        if not scene.id:
            return None

        url = f"{self.base_url}/projects/{project_id}/contes/{scene.id}/real-location"

        for attempt in range(self.max_retries + 1):
            try:
                response = await self._get(url)
                if response.status_code == 404:
                    return None
                response.raise_for_status()
                return parse_registry_payload(response.json())

            except httpx.HTTPError as e:
                retryable = isinstance(e, httpx.TransportError) or (
                    isinstance(e, httpx.HTTPStatusError) and e.response.status_code >= 500
                )
                logger.warning(
                    "Location lookup failed",
                    scene_id=scene.id,
                    attempt=attempt + 1,
                    retryable=retryable,
                    error=str(e),
                )
                if retryable and attempt < self.max_retries:
                    await asyncio.sleep(self.backoff_base * 2 ** attempt)
                else:
                    raise
        return None


def normalize_location_name(name: str) -> str:
    """Normalize a free-text location name for grouping."""
    return " ".join(name.split()).upper()


class LocationNameResolver:
    """
    Offline resolver that groups scenes by their free-text location.

    Used when no location registry is configured. Scenes without a location
    stay unresolved so they never cluster together.
    """

    async def resolve(self, scene: Scene, project_id: str) -> LocationResolution | None:
        if not scene.location or scene.location == UNDECIDED:
            return None
        key = f"name:{normalize_location_name(scene.location)}"
        return LocationResolution(
            location_group_id=key,
            real_location_id=key,
            group_name=scene.location,
            real_location_name=scene.location,
        )


class StaticLocationResolver:
    """Resolver answering from a fixed `scene_id -> resolution` table.

    A table value may be an exception instance, which is raised on lookup.
    """

    def __init__(self, table: dict[str, LocationResolution | Exception | None]):
        self.table = table

    async def resolve(self, scene: Scene, project_id: str) -> LocationResolution | None:
        result = self.table.get(scene.id)
        if isinstance(result, Exception):
            raise result
        return result


async def resolve_locations(
    scenes: list[Scene],
    resolver: LocationResolver,
    project_id: str = "",
    max_concurrent: int = 10,
    timeout: float = 5.0,
) -> list[LocationResolution]:
    """
    Resolve every scene's location with bounded concurrency.

    Args:
        scenes: Scenes to resolve
        resolver: Location registry collaborator
        project_id: Project the scenes belong to
        max_concurrent: Maximum lookups in flight
        timeout: Seconds allowed per lookup (including retries)

    Returns:
        One LocationResolution per scene, in input order. Failed, timed-out
        or empty lookups yield the scene's `unknown_scene_<n>` group.
    """
    semaphore = asyncio.Semaphore(max_concurrent)

    async def resolve_single(scene: Scene) -> LocationResolution:
        async with semaphore:
            try:
                result = await asyncio.wait_for(resolver.resolve(scene, project_id), timeout)
            except asyncio.TimeoutError:
                logger.warning("Location lookup timed out", scene_id=scene.id, timeout=timeout)
                result = None
            except Exception as e:
                logger.warning(
                    "Location lookup failed, using unknown group",
                    scene_id=scene.id,
                    scene_number=scene.scene_number,
                    error=str(e),
                )
                result = None

        if result is None:
            return unknown_resolution(scene)
        return result

    results = await asyncio.gather(*(resolve_single(scene) for scene in scenes))

    unresolved = sum(1 for result in results if not result.resolved)
    logger.info("Locations resolved", total=len(results), unresolved=unresolved)
    return list(results)
