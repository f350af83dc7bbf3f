"""Resource types addressed through collections."""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Dict, FrozenSet, Optional, Type

from .association import Association
from .client import ApiClient, ClientError

logger = logging.getLogger(__name__)


def singularize(name: str) -> str:
    if name.endswith("ies"):
        return name[:-3] + "y"
    if name.endswith("s") and not name.endswith("ss"):
        return name[:-1]
    return name


class Data:
    """A remote record with an attribute bag and pending changes.

    Subclasses declare ``resource_name`` (the collection path segment) and may
    override ``model_key`` (the key holding result lists in a response body),
    ``singular_name`` (the key wrapping a single record) and
    ``type_operations`` (class-level helpers reachable through a collection).
    """

    resource_name: ClassVar[str] = "resources"
    singular_name: ClassVar[str] = "resource"
    model_key: ClassVar[str] = "resources"
    type_operations: ClassVar[FrozenSet[str]] = frozenset()
    fetchable: ClassVar[bool] = False

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "singular_name" not in cls.__dict__:
            cls.singular_name = singularize(cls.resource_name)
        if "model_key" not in cls.__dict__:
            cls.model_key = cls.resource_name

    def __init__(self, client: ApiClient, attributes: Optional[Dict[str, Any]] = None) -> None:
        attributes = dict(attributes or {})
        self.client = client
        self.association: Association = attributes.pop("association", None) or Association(
            type(self)
        )
        self.attributes: Dict[str, Any] = attributes
        self.changes: Dict[str, Any] = dict(attributes) if self.new_record else {}

    @property
    def id(self) -> Any:
        return self.attributes.get("id")

    @property
    def new_record(self) -> bool:
        return self.id is None

    def __getitem__(self, key: str) -> Any:
        return self.attributes[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.attributes[key] = value
        self.changes[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self.attributes

    def get(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.attributes)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.attributes!r})"


class Resource(Data):
    """A record that can be listed, fetched and persisted on its own."""

    fetchable = True

    def save(self) -> bool:
        if not self.new_record and not self.changes:
            return True

        if self.new_record:
            verb = "post"
            path = self.association.generate_path()
            payload = dict(self.attributes)
        else:
            verb = "put"
            path = self.association.generate_path(with_id=self.id)
            payload = dict(self.changes)

        try:
            response = self.client.send(verb, path, body={self.singular_name: payload})
        except ClientError as exc:
            logger.warning("Failed to save %s at %s: %s", type(self).__name__, path, exc)
            return False

        body = response.json() if response.content else {}
        data = body.get(self.singular_name) if isinstance(body, dict) else None
        if isinstance(data, dict):
            self.attributes.update(data)
        self.changes.clear()
        return True

    @classmethod
    def create(cls, client: ApiClient, options: Dict[str, Any]) -> Optional["Resource"]:
        resource = cls(client, options)
        return resource if resource.save() else None

    @classmethod
    def find(cls, client: ApiClient, options: Dict[str, Any]) -> Optional["Resource"]:
        opts = dict(options)
        association = opts.pop("association", None) or Association(cls)
        resource_id = opts.pop("id")
        path = association.generate_path(with_id=resource_id)
        params = {key: value for key, value in opts.items() if value is not None}

        try:
            response = client.send("get", path, params=params)
        except ClientError as exc:
            logger.warning("Failed to find %s %s: %s", cls.__name__, resource_id, exc)
            return None

        body = response.json()
        data = body.get(cls.singular_name) if isinstance(body, dict) else None
        if not isinstance(data, dict):
            return None
        return cls(client, {**data, "association": association})

    @classmethod
    def update(cls, client: ApiClient, options: Dict[str, Any]) -> Optional["Resource"]:
        opts = dict(options)
        association = opts.pop("association", None) or Association(cls)
        resource = cls(client, {"id": opts.pop("id"), "association": association})
        for key, value in opts.items():
            resource[key] = value
        return resource if resource.save() else None

    @classmethod
    def destroy(cls, client: ApiClient, options: Dict[str, Any]) -> bool:
        opts = dict(options)
        association = opts.pop("association", None) or Association(cls)
        path = association.generate_path(with_id=opts.pop("id"))
        try:
            client.send("delete", path)
        except ClientError as exc:
            logger.warning("Failed to destroy %s at %s: %s", cls.__name__, path, exc)
            return False
        return True


def make_resource_type(name: str) -> Type[Resource]:
    class_name = "".join(part.capitalize() for part in singularize(name).split("_"))
    return type(class_name or "Resource", (Resource,), {"resource_name": name})
