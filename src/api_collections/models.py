"""Structured options for collections."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .association import Association


# some params use comma-joined strings instead of repeated query values
SPECIALLY_JOINED_PARAMS = frozenset({"ids", "only"})

WRITE_VERBS = frozenset({"put", "post"})


class CollectionOptions(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    verb: str = "get"
    path: Optional[str] = None
    page: Optional[int] = None
    per_page: Optional[int] = None
    include: List[str] = Field(default_factory=list)
    collection_path: Optional[List[str]] = None
    association: Optional[Association] = None
    params: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("verb")
    @classmethod
    def _lower_verb(cls, value: str) -> str:
        return value.lower()

    @field_validator("include", mode="before")
    @classmethod
    def _listify_include(cls, value: Union[None, str, List[str]]) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return [str(item) for item in value]

    @field_validator("params")
    @classmethod
    def _join_special_params(cls, value: Dict[str, Any]) -> Dict[str, Any]:
        return {
            key: ",".join(str(item) for item in item_value)
            if key in SPECIALLY_JOINED_PARAMS and isinstance(item_value, (list, tuple))
            else item_value
            for key, item_value in value.items()
        }

    @classmethod
    def from_params(cls, **params: Any) -> "CollectionOptions":
        extra = dict(params.pop("params", None) or {})
        recognized = {name: params.pop(name) for name in list(params) if name in cls.model_fields}
        extra.update(params)
        return cls(**recognized, params=extra)

    @property
    def is_write(self) -> bool:
        return self.verb in WRITE_VERBS

    def derive(self, **params: Any) -> "CollectionOptions":
        """Copy these options, merging in recognized keys and pass-through params."""
        data: Dict[str, Any] = {
            "verb": self.verb,
            "path": self.path,
            "page": self.page,
            "per_page": self.per_page,
            "include": list(self.include),
            "collection_path": list(self.collection_path) if self.collection_path else None,
            "association": self.association,
        }
        merged = dict(self.params)
        for name, value in params.items():
            if name == "params":
                merged.update(value or {})
            elif name in data:
                data[name] = value
            else:
                merged[name] = value
        return CollectionOptions(**data, params=merged)
