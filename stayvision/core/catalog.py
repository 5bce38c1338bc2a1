"""Read-only property catalog backed by the static property list."""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Dict, Iterable, Iterator, List, Optional

from stayvision.core.schemas import Property

logger = logging.getLogger(__name__)


class PropertyCatalog:
    """Lookup-by-id view over a fixed list of properties.

    An unknown id is a normal outcome: ``lookup`` returns ``None`` and callers
    decide whether that is a 404 or a prompt to pick again.
    """

    def __init__(self, properties: Iterable[Property]) -> None:
        self._properties: List[Property] = list(properties)
        self._by_id: Dict[str, Property] = {}
        for prop in self._properties:
            if prop.id in self._by_id:
                raise ValueError(f"Duplicate property id in catalog: {prop.id}")
            self._by_id[prop.id] = prop
        logger.debug("Property catalog loaded with %d entries", len(self._properties))

    def lookup(self, property_id: str) -> Optional[Property]:
        return self._by_id.get(property_id)

    def ids(self) -> List[str]:
        return [prop.id for prop in self._properties]

    def __iter__(self) -> Iterator[Property]:
        return iter(self._properties)

    def __len__(self) -> int:
        return len(self._properties)

    def __contains__(self, property_id: object) -> bool:
        return property_id in self._by_id


@lru_cache(maxsize=1)
def get_catalog() -> PropertyCatalog:
    """Return the process-wide catalog built from the bundled property data."""

    from stayvision.data.properties import PROPERTIES

    return PropertyCatalog(PROPERTIES)
