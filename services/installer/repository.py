"""HTTP access to the MeldMC Maven repository."""

from __future__ import annotations

import logging
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from app.config import InstallerConfig, get_installer_config
from app.version import get_app_version
from services.installer.catalog import parse_version_metadata
from services.installer.constants import ARTIFACT_PREFIX, USER_AGENT_PRODUCT
from services.installer.models import (
    BodyReadError,
    HttpStatusError,
    TransportError,
    Version,
    VersionChannel,
    sort_versions,
)
from services.installer.platforms import resolve_platform_token


_LOGGER = logging.getLogger(__name__)


class RepositoryClient:
    """Fetch metadata and client artifacts with a single, time-limited GET."""

    def __init__(self, config: InstallerConfig | None = None) -> None:
        self._config = config or get_installer_config()
        self._user_agent = f"{USER_AGENT_PRODUCT}/{get_app_version()}"

    @property
    def config(self) -> InstallerConfig:
        return self._config

    def fetch(self, url: str) -> bytes:
        """Return the body of ``url``.

        Every failure surfaces as a :class:`NetworkError` subclass; no retry is
        attempted.
        """

        request = Request(url, headers={"User-Agent": self._user_agent})
        _LOGGER.debug("GET %s", url)
        try:
            with urlopen(request, timeout=self._config.request_timeout) as response:  # nosec - HTTPS repository
                status = getattr(response, "status", 200)
                if status != 200:
                    raise HttpStatusError(status, url=url)
                try:
                    body = response.read()
                except OSError as exc:
                    raise BodyReadError(f"failed to read response body: {exc}", url=url) from exc
        except HTTPError as exc:
            _LOGGER.debug("Request to %s returned status %s", url, exc.code)
            raise HttpStatusError(exc.code, url=url) from exc
        except URLError as exc:
            raise TransportError(f"failed to make request: {exc.reason}", url=url) from exc
        except OSError as exc:
            raise TransportError(f"failed to make request: {exc}", url=url) from exc

        _LOGGER.debug("Fetched %d bytes from %s", len(body), url)
        return body

    def metadata_url(self, channel: VersionChannel) -> str:
        if channel is VersionChannel.SNAPSHOT:
            return self._config.snapshots_url
        return self._config.releases_url

    def list_versions(self, channel: VersionChannel) -> list[Version]:
        """Fetch and parse the ``channel`` listing, newest identifier first."""

        url = self.metadata_url(channel)
        document = self.fetch(url)
        versions = sort_versions(parse_version_metadata(document, channel))
        _LOGGER.info("Found %d %s versions", len(versions), channel.value)
        return versions

    def build_platform_artifact_url(
        self, version: Version | str, platform_token: str | None = None
    ) -> str:
        """Return ``<base>/<v>/meldmc-<v>-client-<token>.json`` for ``version``."""

        identifier = version.identifier if isinstance(version, Version) else str(version)
        token = platform_token or resolve_platform_token()
        base = self._config.repository_base_url.rstrip("/")
        return f"{base}/{identifier}/{ARTIFACT_PREFIX}-{identifier}-client-{token}.json"


__all__ = ["RepositoryClient"]
