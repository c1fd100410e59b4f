from __future__ import annotations

from typing import Annotated, Dict, Literal, Optional, Union

from pydantic import BaseModel, Field, PositiveFloat, model_validator

TableFormat = Literal["json", "yaml"]


class PackagedSchemaSourceConfig(BaseModel):
    kind: Literal["packaged"] = "packaged"
    resource: str = "schemaorg.yaml"


class FileSchemaSourceConfig(BaseModel):
    kind: Literal["file"] = "file"
    path: str
    format: Optional[TableFormat] = None  # inferred from the file suffix when omitted


class HttpSchemaSourceConfig(BaseModel):
    kind: Literal["http"] = "http"

    base_url: str
    path: str = "/"
    timeout_seconds: PositiveFloat = 30.0
    headers: Dict[str, str] = Field(default_factory=dict)
    format: Optional[TableFormat] = None  # inferred from Content-Type when omitted

    @model_validator(mode="after")
    def _validate_base_url(self) -> "HttpSchemaSourceConfig":
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return self


SchemaSourceConfig = Annotated[
    Union[PackagedSchemaSourceConfig, FileSchemaSourceConfig, HttpSchemaSourceConfig],
    Field(discriminator="kind"),
]
