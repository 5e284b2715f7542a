"""Configuration models and loaders for :mod:`vuedoc`."""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from enum import StrEnum
from pathlib import Path
from typing import Any, Mapping

import tomllib
from pydantic import BaseModel, Field, ValidationError, field_validator


class SettingsError(ValueError):
    """Raised when extraction settings cannot be loaded or validated."""


class Feature(StrEnum):
    """Documentation kinds that can be switched on or off."""

    PROPS = "props"
    DATA = "data"
    COMPUTED = "computed"
    METHODS = "methods"
    EVENTS = "events"
    SLOTS = "slots"
    MODEL = "model"


class Visibility(StrEnum):
    """Visibility levels attached to documentation entries."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"


class NameCase(StrEnum):
    """Naming conventions applied to prop names."""

    KEBAB = "kebab"
    CAMEL = "camel"
    AS_IS = "as-is"


TOOL_TABLE = ("tool", "vuedoc")


class ExtractionSettings(BaseModel):
    """Options recognized by the extraction engine.

    Example:
        >>> settings = ExtractionSettings(features=["props", "events"])
        >>> settings.is_enabled(Feature.METHODS)
        False
    """

    features: tuple[Feature, ...] = Field(
        default=tuple(Feature),
        description="Documentation kinds to extract; others are not traversed.",
    )
    default_visibility: Visibility = Field(
        default=Visibility.PUBLIC,
        alias="defaultVisibility",
        description="Visibility used when no @public/@protected/@private tag.",
    )
    default_category: str | None = Field(
        default=None,
        alias="defaultCategory",
        description="Category assigned to entries without a @category tag.",
    )
    prop_case: NameCase = Field(
        default=NameCase.KEBAB,
        alias="propCase",
        description="Naming convention applied to extracted prop names.",
    )
    emit_primitives: tuple[str, ...] = Field(
        default=("$emit", "emit"),
        alias="emitPrimitives",
        description="Callee names recognized as event emission calls.",
    )
    default_model_prop: str = Field(
        default="value",
        alias="defaultModelProp",
        description="Prop implementing v-model when no model option exists.",
    )
    default_model_event: str = Field(
        default="input",
        alias="defaultModelEvent",
        description="Event implementing v-model when no model option exists.",
    )

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "str_strip_whitespace": True,
    }

    @field_validator("features", mode="before")
    @classmethod
    def _normalize_features(cls, value: Any) -> tuple[str, ...]:
        """Accept any iterable of names and drop duplicates in order."""

        if value is None:
            return ()
        if isinstance(value, str):
            value = [value]
        normalized = [str(item).strip().lower() for item in value]
        return tuple(dict.fromkeys(item for item in normalized if item))

    @field_validator("emit_primitives", mode="before")
    @classmethod
    def _normalize_primitives(cls, value: Any) -> tuple[str, ...]:
        if isinstance(value, str):
            value = [value]
        primitives = tuple(
            dict.fromkeys(str(item).strip() for item in value or ())
        )
        if not all(primitives):
            raise ValueError("Emit primitive names cannot be empty.")
        return primitives

    def is_enabled(self, feature: Feature | str) -> bool:
        """Return ``True`` when ``feature`` is part of the enabled set."""

        return Feature(feature) in self.features


def settings_from_mapping(raw: Mapping[str, Any] | None) -> ExtractionSettings:
    """Validate ``raw`` into :class:`ExtractionSettings`.

    Raises:
        SettingsError: If the mapping contains invalid values.
    """

    if raw is None:
        return ExtractionSettings()
    if not isinstance(raw, MappingABC):
        raise SettingsError(f"Unsupported settings payload: {raw!r}")
    try:
        return ExtractionSettings.model_validate(dict(raw))
    except ValidationError as exc:
        raise SettingsError(str(exc)) from exc


def load_settings(path: str | Path) -> ExtractionSettings:
    """Load settings from a TOML file.

    A ``[tool.vuedoc]`` table is used when present (so ``pyproject.toml`` can
    host the options); otherwise the top-level table is read.

    Raises:
        SettingsError: If the file is missing, malformed, or invalid.
    """

    config_path = Path(path).expanduser()
    try:
        with config_path.open("rb") as fh:
            payload = tomllib.load(fh)
    except FileNotFoundError as exc:
        raise SettingsError(f"Settings file not found: {config_path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise SettingsError(f"Invalid TOML in {config_path}: {exc}") from exc

    table: Any = payload
    for key in TOOL_TABLE:
        if not isinstance(table, MappingABC) or key not in table:
            table = payload
            break
        table = table[key]
    return settings_from_mapping(table)


__all__ = [
    "ExtractionSettings",
    "Feature",
    "NameCase",
    "SettingsError",
    "Visibility",
    "load_settings",
    "settings_from_mapping",
]
