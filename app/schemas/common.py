from pydantic import BaseModel, model_validator
from typing import Any, ClassVar, Dict, Tuple


class PartialUpdate(BaseModel):
    """
    Base schema for PATCH bodies.

    Every field is optional, but fields listed in `non_nullable` may not be
    sent as an explicit null.
    """
    non_nullable: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_nulls(self):
        for name in self.model_fields_set:
            if name in self.non_nullable and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> Dict[str, Any]:
        """Fields the client actually sent, keyed by their API names."""
        return self.model_dump(exclude_unset=True, by_alias=True)
