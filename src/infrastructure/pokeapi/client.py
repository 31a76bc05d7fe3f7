"""PokéAPI HTTP client."""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional
from urllib.parse import quote

import httpx
import structlog

from core.config import Settings
from core.exceptions import PokeApiError, PokemonNotFoundError

logger = structlog.get_logger()


@dataclass
class Pokemon:
    id: int
    name: str
    forms: list[str] = field(default_factory=list)
    sprite_url: Optional[str] = None


@dataclass
class PokemonEntry:
    id: int
    name: str


@dataclass
class PokemonPage:
    """One slice of the full Pokémon list."""

    count: int
    entries: list[PokemonEntry] = field(default_factory=list)


def _id_from_resource_url(url: str) -> int:
    # Resource URLs end with the numeric ID: .../pokemon/25/
    return int(url.rstrip("/").rsplit("/", 1)[-1])


class PokeApiClient:
    """Thin async wrapper around the PokéAPI REST endpoints."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/",
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "PokeApiClient":
        return cls(settings.pokeapi_base_url, timeout=settings.pokeapi_timeout_seconds)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_pokemon(self, name: str) -> Pokemon:
        """Look up a Pokémon by name or national dex number."""
        key = name.strip().lower()
        if not key:
            raise PokemonNotFoundError(name)

        data = await self._get_json(f"pokemon/{quote(key, safe='')}", not_found=lambda: PokemonNotFoundError(name))
        return Pokemon(
            id=data["id"],
            name=data["name"],
            forms=[form["name"] for form in data.get("forms", [])],
            sprite_url=(data.get("sprites") or {}).get("front_default"),
        )

    async def list_pokemon(self, offset: int = 0, limit: int = 10) -> PokemonPage:
        """Get one page of the full Pokémon list, in national dex order."""
        data = await self._get_json("pokemon", params={"offset": max(offset, 0), "limit": max(limit, 1)})
        return PokemonPage(
            count=data["count"],
            entries=[
                PokemonEntry(id=_id_from_resource_url(entry["url"]), name=entry["name"])
                for entry in data.get("results", [])
            ],
        )

    async def _get_json(
        self,
        path: str,
        params: Optional[dict[str, Any]] = None,
        not_found: Optional[Callable[[], Exception]] = None,
    ) -> dict[str, Any]:
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as e:
            logger.error("pokeapi_request_failed", path=path, error=str(e))
            raise PokeApiError(f"Failed to reach PokéAPI: {e}") from e

        if response.status_code == 404 and not_found is not None:
            raise not_found()

        try:
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPStatusError, ValueError) as e:
            logger.error("pokeapi_bad_response", path=path, status_code=response.status_code)
            raise PokeApiError(f"Unexpected response from PokéAPI: {response.status_code}") from e
