from typing import Any, Dict, Generic, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict

M = TypeVar("M", bound="JsonObject")


class ModelBuilder(Generic[M]):
    """Mutable assembly of a model, one field at a time.

    Every model field gets a chainable setter named after it::

        RouteEvent.builder().id("abc").address("I-80 rest area").build()

    ``build()`` validates the collected values and returns the frozen model.
    """

    def __init__(self, model: Type[M], values: Optional[Dict[str, Any]] = None):
        self._model = model
        self._values: Dict[str, Any] = dict(values or {})

    def __getattr__(self, name: str):
        if name.startswith("_") or name not in self._model.model_fields:
            raise AttributeError(f"{self._model.__name__} builder has no field '{name}'")

        def setter(value: Any) -> "ModelBuilder[M]":
            self._values[name] = value
            return self

        return setter

    def build(self) -> M:
        return self._model(**self._values)


class JsonObject(BaseModel):
    """Immutable record that reads and writes the directions API JSON shape."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @classmethod
    def builder(cls: Type[M]) -> ModelBuilder[M]:
        return ModelBuilder(cls)

    def to_builder(self: M) -> ModelBuilder[M]:
        values = {name: getattr(self, name) for name in type(self).model_fields}
        return ModelBuilder(type(self), values)

    @classmethod
    def from_json(cls: Type[M], json: str) -> M:
        """Parse a JSON document, raising ``pydantic.ValidationError`` if it does not fit."""
        return cls.model_validate_json(json)

    def to_json(self) -> str:
        # Absent fields are left out, as the API does.
        return self.model_dump_json(by_alias=True, exclude_none=True)
