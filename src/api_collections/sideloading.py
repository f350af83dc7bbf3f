"""Merge side-loaded records into fetched resources."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Sequence

from .resource import Data, singularize

logger = logging.getLogger(__name__)


class Sideloader:
    def apply(
        self,
        resources: Sequence[Data],
        includes: Sequence[str],
        body: Mapping[str, Any],
    ) -> None:
        for include in includes:
            records = body.get(include)
            if not isinstance(records, list):
                logger.debug("No side-loaded records for include=%s", include)
                continue

            index = self._index_by_id(records)
            key = singularize(include)
            for resource in resources:
                self._attach(resource, include, key, index)

    def _index_by_id(self, records: List[Any]) -> Dict[Any, Dict[str, Any]]:
        return {
            record["id"]: record
            for record in records
            if isinstance(record, dict) and "id" in record
        }

    def _attach(
        self,
        resource: Data,
        include: str,
        key: str,
        index: Dict[Any, Dict[str, Any]],
    ) -> None:
        # sideloads are not user modifications, bypass change tracking
        single_id = resource.get(f"{key}_id")
        if single_id is not None and single_id in index:
            resource.attributes[key] = index[single_id]

        many_ids = resource.get(f"{key}_ids")
        if isinstance(many_ids, list):
            resource.attributes[include] = [index[i] for i in many_ids if i in index]
