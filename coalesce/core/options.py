from __future__ import annotations
# -*- coding: utf-8 -*-

"""
options.py – The settled configuration consumed by scanner, filter and renderer.

YAML keys are camelCase (outputFilePath, sourceDirectoryPaths, ...); attribute
names are snake_case. Unknown keys are ignored, missing or null keys fall back
to empty values.
"""

from typing import Any, Iterable, List

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator
from pydantic.alias_generators import to_camel


LIST_FIELDS = (
    "source_directory_paths",
    "include_extensions",
    "exclude_extensions",
    "exclude_directory_names",
    "exclude_file_names",
    "path_only_extensions",
)

EXTENSION_FIELDS = ("include_extensions", "exclude_extensions", "path_only_extensions")


def contains_ignore_case(values: Iterable[str], item: str) -> bool:
    needle = item.lower()
    return any(v.lower() == needle for v in values)


def lowered(values: Iterable[str]) -> frozenset:
    return frozenset(v.lower() for v in values)


def normalize_ext(ext: str) -> str:
    ext = ext.strip()
    if ext and not ext.startswith("."):
        ext = "." + ext
    return ext


class AppOptions(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    output_file_path: str = ""
    source_directory_paths: List[str] = Field(default_factory=list)
    include_extensions: List[str] = Field(default_factory=list)
    exclude_extensions: List[str] = Field(default_factory=list)
    exclude_directory_names: List[str] = Field(default_factory=list)
    exclude_file_names: List[str] = Field(default_factory=list)
    path_only_extensions: List[str] = Field(default_factory=list)

    # Filled once by paths.prepare_paths(); never part of the YAML surface.
    _valid_source_directory_paths: List[str] = PrivateAttr(default_factory=list)
    _sources_resolved: bool = PrivateAttr(default=False)

    @field_validator("output_file_path", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator(*LIST_FIELDS, mode="before")
    @classmethod
    def _coerce_list(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        if isinstance(v, (list, tuple, set, frozenset)):
            return [item for item in v if item is not None]
        return v

    @field_validator("source_directory_paths", "exclude_directory_names", "exclude_file_names")
    @classmethod
    def _strip_names(cls, v: List[str]) -> List[str]:
        return [s.strip() for s in v if s.strip()]

    @field_validator(*EXTENSION_FIELDS)
    @classmethod
    def _normalize_extensions(cls, v: List[str]) -> List[str]:
        return [normalize_ext(e) for e in v if e.strip()]

    @property
    def valid_source_directory_paths(self) -> List[str]:
        return list(self._valid_source_directory_paths)

    @property
    def sources_resolved(self) -> bool:
        return self._sources_resolved

    def set_valid_source_directories(self, paths: Iterable[str]) -> None:
        if self._sources_resolved:
            raise RuntimeError("valid source directories have already been resolved")
        self._valid_source_directory_paths = list(paths)
        self._sources_resolved = True
