"""
app/schemas/control_panel.py

Declarative control-panel contract rendered and persisted by the host
configuration UI.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

ControlType = Literal[
    "SelectControl",
    "MetricsControl",
    "AdhocFilterControl",
    "CheckboxControl",
    "TextControl",
    "DateFilterControl",
    "CurrencyControl",
]

Validator = Literal["non_empty", "integer", "number"]


class ControlOption(BaseModel):
    """Labelled option of a select control."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    label: str = Field(min_length=1)
    value: Any


class ControlField(BaseModel):
    """One control and the form-data key it persists under."""

    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)

    name: str = Field(min_length=1)
    type: ControlType
    label: str = Field(min_length=1)
    description: str = ""
    default: Any = None
    choices: tuple[tuple[str, str], ...] | None = None
    options: tuple[ControlOption, ...] | None = None
    validators: tuple[Validator, ...] = ()
    multi: bool = False
    clearable: bool = True
    render_trigger: bool = False

    @model_validator(mode="after")
    def _default_is_selectable(self) -> "ControlField":
        if self.default is None:
            return self
        allowed: list[Any] | None = None
        if self.choices is not None:
            allowed = [value for value, _ in self.choices]
        elif self.options is not None:
            allowed = [option.value for option in self.options]
        if allowed is not None and self.default not in allowed:
            raise ValueError(
                f"Default {self.default!r} of control {self.name!r} is not one of {allowed!r}."
            )
        return self


class ControlSection(BaseModel):
    """Labelled group of control rows."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    label: str = Field(min_length=1)
    expanded: bool = True
    rows: tuple[tuple[ControlField, ...], ...]


class ControlPanel(BaseModel):
    """
    Full control-panel manifest.

    Field names are the form-data keys, so they must be unique across all
    sections.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    sections: tuple[ControlSection, ...]

    @model_validator(mode="after")
    def _unique_field_names(self) -> "ControlPanel":
        seen: set[str] = set()
        duplicates: set[str] = set()
        for control in self.fields():
            if control.name in seen:
                duplicates.add(control.name)
            seen.add(control.name)
        if duplicates:
            raise ValueError(f"Duplicate control names: {sorted(duplicates)}.")
        return self

    def fields(self) -> list[ControlField]:
        return [control for section in self.sections for row in section.rows for control in row]

    def field(self, name: str) -> ControlField:
        for control in self.fields():
            if control.name == name:
                return control
        raise KeyError(name)
