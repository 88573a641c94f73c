"""Best-effort UniProt descriptions for hovered observations.

Lookups are optional enrichment: every failure resolves to ``None`` and
nothing here can block or break the interaction state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

import httpx

logger = logging.getLogger(__name__)

UNIPROT_SEARCH_URL = "https://rest.uniprot.org/uniprotkb/search"
DESCRIPTION_MAX = 220


@dataclass(frozen=True)
class Annotation:
    protein_name: str = ""
    description: str = ""

    def text(self) -> str:
        if self.protein_name and self.description:
            return f"{self.protein_name}: {self.description}"
        return self.protein_name or self.description


def parse_uniprot_entry(payload: object) -> Annotation | None:
    """Extract protein name and FUNCTION text from a UniProt search response."""
    if not isinstance(payload, dict):
        return None
    results = payload.get("results") or []
    if not results or not isinstance(results[0], dict):
        return None
    entry = results[0]

    recommended = (entry.get("proteinDescription") or {}).get("recommendedName") or {}
    protein_name = (recommended.get("fullName") or {}).get("value") or ""
    description = ""
    for comment in entry.get("comments") or []:
        if comment.get("commentType") != "FUNCTION":
            continue
        texts = comment.get("texts") or []
        if texts and texts[0].get("value"):
            description = texts[0]["value"]
        break
    if len(description) > DESCRIPTION_MAX:
        description = description[:DESCRIPTION_MAX].strip() + "…"

    if not protein_name and not description:
        return None
    return Annotation(protein_name=protein_name, description=description)


class UniProtClient:
    """Cached UniProt lookups keyed by gene symbol.

    Parameters
    ----------
    timeout : float
        Request timeout in seconds.
    client : httpx.Client, optional
        Injected HTTP client (tests pass one with a mock transport).  An
        injected client is left open by :meth:`close`.

    Only answers are cached: a found entry, or an empty result set.  Network
    and HTTP errors are retried on the next call.
    """

    def __init__(
        self,
        timeout: float = 5.0,
        client: httpx.Client | None = None,
        base_url: str = UNIPROT_SEARCH_URL,
    ) -> None:
        self.base_url = base_url
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)
        self._cache: Dict[str, Optional[Annotation]] = {}

    def describe(self, symbol: str) -> Annotation | None:
        key = str(symbol or "").strip()
        if not key:
            return None
        if key in self._cache:
            return self._cache[key]

        params = {
            "query": f"(gene:{key})",
            "format": "json",
            "size": 1,
            "fields": "protein_name,gene_names,organism_name,cc_function",
        }
        try:
            response = self._client.get(self.base_url, params=params)
            response.raise_for_status()
            result = parse_uniprot_entry(response.json())
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("UniProt lookup for %s failed: %s", key, exc)
            return None

        self._cache[key] = result
        return result

    def close(self) -> None:
        if self._owns_client and not self._client.is_closed:
            self._client.close()

    def __enter__(self) -> "UniProtClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class AnnotationTracker:
    """Drops lookup results that arrive after the focus has moved on.

    Call :meth:`focus` when a point becomes active and keep the returned
    token with the pending lookup; :meth:`apply` accepts the result only if
    that token is still current.
    """

    def __init__(self) -> None:
        self._token = 0
        self.current_key: str | None = None
        self.current: Annotation | None = None

    def focus(self, key: str | None) -> int:
        self._token += 1
        self.current_key = key
        self.current = None
        return self._token

    def clear(self) -> None:
        self.focus(None)

    def is_current(self, token: int) -> bool:
        return token == self._token and self.current_key is not None

    def apply(self, token: int, result: Annotation | None) -> bool:
        if not self.is_current(token):
            logger.debug("Discarding stale annotation (token %d)", token)
            return False
        self.current = result
        return True
