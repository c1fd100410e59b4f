from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from seoschema.core.exceptions import UnknownPropertyPolicy


class CodecConfig(BaseModel):
    """Design-time choices for how documents are read and written."""

    unknown_properties: Literal["fail", "warn", "preserve"] = "fail"
    include_context: bool = False                 # Emit "@context" on top-level documents
    context: str = "https://schema.org"

    @property
    def unknown_property_policy(self) -> UnknownPropertyPolicy:
        return UnknownPropertyPolicy(self.unknown_properties)
