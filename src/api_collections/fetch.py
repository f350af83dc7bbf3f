"""Single round-trip loading of a collection page."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .client import ApiClient, ClientError
from .logging import redact_url
from .sideloading import Sideloader

if TYPE_CHECKING:
    from .collection import Collection

logger = logging.getLogger(__name__)


class FetchEngine:
    def __init__(self, client: ApiClient, sideloader: Optional[Sideloader] = None) -> None:
        self.client = client
        self.sideloader = sideloader or Sideloader()

    def fetch(self, collection: "Collection", reload: bool = False) -> List[Any]:
        cache = collection.cache
        if cache.is_valid(reload, collection.fetchable):
            return cache.resources

        if collection.association.has_unsaved_parent:
            logger.debug("Parent of %s is not saved yet, skipping fetch", collection.path)
            return cache.populate([])

        options = collection.options
        address = collection.cursor.take_pending()
        if address:
            target, params = address, {}
            shown = redact_url(address)
        else:
            target, params = collection.path, self.build_params(collection)
            shown = target

        try:
            if options.is_write:
                response = self.client.send(options.verb, target, body=params)
            else:
                response = self.client.send(options.verb, target, params=params)
        except ClientError as exc:
            logger.warning("Fetching %s failed, treating as empty: %s", shown, exc)
            return cache.populate([])

        collection.response = response
        body = response.json() if response.content else {}
        if not isinstance(body, dict):
            logger.warning("Unexpected collection response shape from %s: %s", shown, type(body))
            return cache.populate([])

        body = dict(body)
        resource_class = collection.resource_class
        results = body.pop(resource_class.model_key, None)
        if results is None:
            results = body.pop("results", None)
        if not isinstance(results, list):
            logger.warning("No %s results in response from %s", resource_class.model_key, shown)
            results = []

        resources = [resource_class(self.client, attributes) for attributes in results]
        cache.populate(
            resources,
            count=body.get("count"),
            next_page=body.get("next_page"),
            previous_page=body.get("previous_page"),
        )
        self.sideloader.apply(resources, options.include, body)
        return resources

    def build_params(self, collection: "Collection") -> Dict[str, Any]:
        options = collection.options
        params = {key: value for key, value in options.params.items() if value is not None}
        params.update(collection.cursor.params())
        if options.include:
            params["include"] = ",".join(options.include)
        return params
