"""
Wire envelopes shared by the platform API and the card response protocol.
"""

from typing import Any, ClassVar, Optional

from pydantic import BaseModel, SerializationInfo, SerializerFunctionWrapHandler, model_serializer


class WireModel(BaseModel):
    """Base for JSON payloads: ``None`` fields are left out of the output,
    and fields named in ``omit_empty`` are also left out when falsy."""

    omit_empty: ClassVar[frozenset[str]] = frozenset()

    model_config = {"populate_by_name": True}

    @model_serializer(mode="wrap")
    def _drop_absent(self, handler: SerializerFunctionWrapHandler, info: SerializationInfo) -> Any:
        data = handler(self)
        if not isinstance(data, dict):
            return data
        for name, field in type(self).model_fields.items():
            key = (field.alias or name) if info.by_alias else name
            if key not in data:
                continue
            value = data[key]
            if value is None or (name in self.omit_empty and not value):
                del data[key]
        return data

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class APIEnvelope(BaseModel):
    """Standard platform response: { "code": 0, "message": "", "data": <actual_data> }"""
    code: int
    message: str = ""
    data: Optional[Any] = None
