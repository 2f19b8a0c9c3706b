"""Puppet Forge API client for DepDrift."""

import asyncio
import ssl
from typing import Any, Optional

import aiohttp
import certifi
from aiohttp import ClientTimeout

from ..config import AuditConfig
from ..exceptions import RegistryLookupError
from ..utils.logging import get_logger


class ForgeClient:
    """Async client reporting the current release of Forge modules."""

    def __init__(
        self,
        config: Optional[AuditConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ) -> None:
        """Initialize the Forge client.

        Args:
            config: Audit configuration (forge URL, timeout, user agent)
            session: Optional aiohttp session for connection reuse
        """
        self.config = config or AuditConfig()
        self.logger = get_logger("dep_drift.forge")
        self._session = session
        self._owns_session = session is None
        self._ssl_context = ssl.create_default_context(cafile=certifi.where())

    async def __aenter__(self) -> "ForgeClient":
        """Async context manager entry."""
        self._get_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    @staticmethod
    def normalize_name(name: str) -> str:
        """Convert a module title to the Forge slug ('owner/name' -> 'owner-name')."""
        return name.strip().replace("/", "-")

    async def current_version(self, name: str) -> str:
        """Get the current release version of a module.

        Args:
            name: Module title as declared in the Puppetfile

        Returns:
            Version string of the current release

        Raises:
            RegistryLookupError: If the module is unknown or the Forge cannot be reached
        """
        slug = self.normalize_name(name)
        url = f"{self.config.forge_url.rstrip('/')}/v3/modules/{slug}"
        self.logger.debug(f"GET {url}")

        try:
            session = self._get_session()
            async with session.get(url) as response:
                if response.status == 404:
                    raise RegistryLookupError(name, "module not found")
                if response.status != 200:
                    error_text = await response.text()
                    raise RegistryLookupError(name, f"HTTP {response.status}: {error_text[:200]}")
                data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise RegistryLookupError(name, str(e) or type(e).__name__) from e
        except ValueError as e:
            raise RegistryLookupError(name, f"invalid JSON response: {e}") from e

        return self._parse_current_version(name, data)

    def _parse_current_version(self, name: str, data: Any) -> str:
        if not isinstance(data, dict):
            raise RegistryLookupError(name, f"unexpected response type {type(data).__name__}")
        release = data.get("current_release") or {}
        version = release.get("version") if isinstance(release, dict) else None
        if not version:
            raise RegistryLookupError(name, "response has no current release")
        return str(version)

    def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session."""
        if not self._session or self._session.closed:
            connector = aiohttp.TCPConnector(ssl=self._ssl_context)
            self._session = aiohttp.ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                connector=connector,
                headers={"User-Agent": self.config.user_agent},
            )
            self._owns_session = True
        return self._session
