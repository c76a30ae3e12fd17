"""Category data models and the rule variants they carry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, Any, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from categorium.config.models import HEX_COLOR_PATTERN
from categorium.registry.models import FileKind


class TextRule(BaseModel):
    """Case-insensitive substring match against a file's name or tags."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    value: str


class YearRule(BaseModel):
    """Match files created in the given calendar year (UTC)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["year"] = "year"
    value: int


class TypeRule(BaseModel):
    """Match files whose type equals the given kind."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["type"] = "type"
    value: FileKind


Rule = Annotated[Union[TextRule, YearRule, TypeRule], Field(discriminator="kind")]
AnyRule = Union[TextRule, YearRule, TypeRule]


def coerce_rule(value: Any) -> Any:
    """Turn a primitive rule into its tagged form.

    Strings become text rules and integers become year rules. Anything else is
    returned untouched for pydantic to validate.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return {"kind": "text", "value": value}
    if isinstance(value, int):
        return {"kind": "year", "value": value}
    if isinstance(value, BaseModel):
        return value.model_dump()
    return value


def coerce_rules(value: Any) -> Any:
    """Apply :func:`coerce_rule` to each entry of a rule sequence."""
    if isinstance(value, (list, tuple)):
        return [coerce_rule(item) for item in value]
    return value


def rule_value(rule: AnyRule) -> str | int:
    """Return the primitive payload of ``rule``."""
    if isinstance(rule, TypeRule):
        return rule.value.value
    return rule.value


def _require_text(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.strip():
        raise ValueError("must not be blank")
    return value


class CategorySpec(BaseModel):
    """Input to the category store.

    Attributes:
        name: Display name.
        icon: Symbolic icon name.
        color: Hex colour such as ``#3b82f6``.
        rules: Ordered rules; primitives are coerced to tagged rules.
        count: Match count snapshot; computed by the engine when omitted.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    icon: str
    color: str = Field(pattern=HEX_COLOR_PATTERN)
    rules: List[Rule] = Field(default_factory=list)
    count: Optional[int] = Field(default=None, ge=0)

    @field_validator("rules", mode="before")
    @classmethod
    def _coerce_rules(cls, value: Any) -> Any:
        return coerce_rules(value)

    @field_validator("name", "icon")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        return _require_text(value)

    def rule_values(self) -> list[str | int]:
        """Return the primitive payload of each rule."""
        return [rule_value(rule) for rule in self.rules]


class Category(BaseModel):
    """A committed category held by the store.

    Attributes:
        id: Identifier unique for the lifetime of the store.
        name: Display name; not required to be unique.
        icon: Symbolic icon name.
        color: Hex colour.
        count: Number of matching files when the category was created.
        rules: Ordered membership rules, OR-combined; immutable like the rest
            of the category.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    name: str
    icon: str
    color: str = Field(pattern=HEX_COLOR_PATTERN)
    count: int = Field(ge=0)
    rules: Tuple[Rule, ...] = ()

    @field_validator("rules", mode="before")
    @classmethod
    def _coerce_rules(cls, value: Any) -> Any:
        return coerce_rules(value)

    @field_validator("name", "icon")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        return _require_text(value)

    def rule_values(self) -> list[str | int]:
        """Return the primitive payload of each rule."""
        return [rule_value(rule) for rule in self.rules]


class CategoryUpdate(BaseModel):
    """Partial update merged into an existing category; ``count`` is never touched."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = Field(default=None, pattern=HEX_COLOR_PATTERN)
    rules: Optional[List[Rule]] = None

    @field_validator("rules", mode="before")
    @classmethod
    def _coerce_rules(cls, value: Any) -> Any:
        return coerce_rules(value)

    @field_validator("name", "icon")
    @classmethod
    def _not_blank(cls, value: Optional[str]) -> Optional[str]:
        return _require_text(value)


@dataclass(slots=True)
class CategoryDraft:
    """Unvalidated category fields emitted by a strategy.

    Strategies build drafts from configuration values, so a draft may carry
    fields a store would reject. The engine validates each draft on its own
    when committing it.

    Attributes:
        name: Display name.
        icon: Symbolic icon name.
        color: Hex colour.
        rules: Tagged rules for the category.
        count: Matches counted by the strategy when it built the draft.
    """

    name: str
    icon: str
    color: str
    rules: List[AnyRule] = field(default_factory=list)
    count: int = 0

    def fields(self) -> dict[str, Any]:
        """Return the draft as a mapping accepted by :class:`CategorySpec`."""
        return {
            "name": self.name,
            "icon": self.icon,
            "color": self.color,
            "rules": list(self.rules),
            "count": self.count,
        }

    def rule_values(self) -> list[str | int]:
        """Return the primitive payload of each rule."""
        return [rule_value(rule) for rule in self.rules]


class CategorizationReport(BaseModel):
    """Outcome of one strategy run.

    Attributes:
        strategy: Strategy key (``artist``, ``genre``, ``type``, or ``date``).
        created: Categories committed to the store, in emission order.
        skipped: Drafts left out by the dedupe policy.
        errors: Messages for specs whose commit failed.
    """

    strategy: str
    created: List[Category] = Field(default_factory=list)
    skipped: List[CategoryDraft] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)


__all__ = [
    "TextRule",
    "YearRule",
    "TypeRule",
    "Rule",
    "AnyRule",
    "coerce_rule",
    "coerce_rules",
    "rule_value",
    "CategorySpec",
    "Category",
    "CategoryUpdate",
    "CategoryDraft",
    "CategorizationReport",
]
