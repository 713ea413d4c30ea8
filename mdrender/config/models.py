import codecs

from pydantic import BaseModel, Field, field_validator
from typing import Literal


class SourceConfig(BaseModel):
    directory: str = "docs/chapters"
    encoding: str = "utf-8"

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        try:
            info = codecs.lookup(v)
        except LookupError:
            raise ValueError(f"unknown encoding: {v}")
        # bytes-to-bytes and str-to-str codecs (hex, rot13) cannot decode files
        if not getattr(info, "_is_text_encoding", True):
            raise ValueError(f"{v} is not a text encoding")
        return v


class RendererConfig(BaseModel):
    preset: Literal["js-default", "commonmark", "zero"] = "js-default"
    html: bool = True
    wrapper_class: str = Field(default="nsw", pattern=r"^[\w\- ]*$")


class OutputConfig(BaseModel):
    directory: str = "rendered"
    extension: str = Field(default=".html", min_length=1)
    strip_source_suffix: bool = False


class MdRenderConfig(BaseModel):
    source: SourceConfig = Field(default_factory=SourceConfig)
    renderer: RendererConfig = Field(default_factory=RendererConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    max_workers: int = Field(default=8, gt=0)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
