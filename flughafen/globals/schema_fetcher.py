"""Fetching of JSON Schema documents from a schema registry.

The handlers ship with built-in schemas. When the CLI runs with
``--remote-schemas`` the pipeline asks a :class:`SchemaFetcher` once, when it is
built, for the registry's (usually stricter) version of each schema. Typical usage:

    fetcher = SchemaFetcher()
    schema = fetcher.fetch_schema(FileKind.GHA_WORKFLOW)
    if schema is not None:
        handler = handler.with_schema(schema)
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import requests

from flughafen.classification.file_kind import FileKind

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_URL = "https://json.schemastore.org"

SCHEMA_NAMES: Dict[FileKind, str] = {
    FileKind.GHA_WORKFLOW: "github-workflow.json",
    FileKind.GHA_ACTION: "github-action.json",
    FileKind.GITHUB_FUNDING: "github-funding.json",
    FileKind.DEPENDABOT_CONFIG: "dependabot-2.0.json",
}


class ISchemaFetcher(ABC):
    """Abstract interface for schema sources."""

    @abstractmethod
    def fetch_schema(self, kind: FileKind) -> Optional[Dict[str, Any]]:
        """Return the schema document for ``kind``, or None if unavailable."""
        pass

    @abstractmethod
    def clear_cache(self) -> None:
        pass


class SchemaFetcher(ISchemaFetcher):
    """Fetches schemas over HTTP and caches them for the lifetime of the instance.

    Failed lookups are cached as None so a batch run asks the registry at most
    once per kind. There is no retry: a caller that wants one re-creates the
    fetcher or calls :meth:`clear_cache`.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_SCHEMA_URL,
        session: Optional[requests.Session] = None,
        request_timeout: int = 10,
        github_token: Optional[str] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.request_timeout = request_timeout
        self.cache: Dict[FileKind, Optional[Dict[str, Any]]] = {}
        if github_token:
            self.session.headers.update({"Authorization": f"token {github_token}"})

    def url_for(self, kind: FileKind) -> Optional[str]:
        name = SCHEMA_NAMES.get(kind)
        if name is None:
            return None
        return f"{self.base_url}/{name}"

    def fetch_schema(self, kind: FileKind) -> Optional[Dict[str, Any]]:
        if kind in self.cache:
            return self.cache[kind]

        url = self.url_for(kind)
        schema: Optional[Dict[str, Any]] = None
        if url is not None:
            try:
                response = self.session.get(url, timeout=self.request_timeout)
                response.raise_for_status()
                schema = response.json()
            except (requests.RequestException, ValueError) as e:
                logger.warning(f"Could not fetch schema for {kind.value} from {url}: {e}")
                schema = None

        self.cache[kind] = schema
        return schema

    def clear_cache(self) -> None:
        self.cache.clear()
