#!/usr/bin/env python3
"""
Filter specifications and the predicate compiler.

A list request is described by an immutable FilterSpec. The PredicateCompiler
turns it into FilterRules and splits them into two predicate sets:

- storage: indexable, exactly matchable filters pushed down to the database
  (enums, boolean flags, exact tags, single-column location substrings).
- in_process: filters evaluated after loading (multi-field search, matches
  against the derived display name, cheap substring checks).

Where each rule runs is declared on the FilterField that produces it, so the
split can be inspected and tested instead of being implied by code order.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterable, Literal, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from core.config_loader import FilterThresholds
from core.errors import ValidationError

# Dropdown values the UI sends when no choice is made
_ALL_VALUES = {"", "all"}


class RuleKind(str, Enum):
    EXACT = "exact"
    SUBSTRING = "substring"
    RANGE = "range"


class Placement(str, Enum):
    STORAGE = "storage"
    IN_PROCESS = "in_process"


@dataclass(frozen=True)
class FilterRule:
    """
    A single compiled filter condition.

    Attributes:
        name: Wire name of the filter that produced the rule.
        kind: exact | substring | range.
        fields: Record attributes inspected. A substring rule matches when
            any of them contains the value.
        value: Comparison value; for range rules a (low, high) tuple where
            None means an open end.
        placement: Where the rule is evaluated.
    """
    name: str
    kind: RuleKind
    fields: Tuple[str, ...]
    value: Any
    placement: Placement

    def matches(self, record: Any) -> bool:
        values = [_read_field(record, f) for f in self.fields]

        if self.kind is RuleKind.EXACT:
            return any(v is not None and v == self.value for v in values)

        if self.kind is RuleKind.SUBSTRING:
            needle = str(self.value).lower()
            return any(v is not None and needle in str(v).lower() for v in values)

        low, high = self.value
        return any(v is not None and _in_range(v, low, high) for v in values)


@dataclass(frozen=True)
class Predicate:
    """Logical AND of rules. An empty predicate accepts every record."""
    rules: Tuple[FilterRule, ...] = ()

    def __call__(self, record: Any) -> bool:
        return all(rule.matches(record) for rule in self.rules)

    @property
    def is_noop(self) -> bool:
        return not self.rules


@dataclass(frozen=True)
class CompiledFilters:
    storage: Predicate
    in_process: Predicate
    applied: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FilterField:
    """
    Declares how one FilterSpec attribute becomes a FilterRule.

    Attributes:
        param: FilterSpec attribute holding the value (the lower bound for
            range filters).
        kind: Rule kind to emit.
        fields: Record attributes the rule inspects.
        placement: Storage-side or in-process.
        min_length: Text values shorter than this (after stripping) are
            treated as absent.
        upper_param: For range filters, the attribute holding the upper bound.
        only_if_true: Boolean flags that only filter when set (onlyAvailable).
    """
    param: str
    kind: RuleKind
    fields: Tuple[str, ...]
    placement: Placement
    min_length: int = 0
    upper_param: Optional[str] = None
    only_if_true: bool = False

    @property
    def wire_name(self) -> str:
        return to_camel(self.param)


class PredicateCompiler:
    """Compiles a FilterSpec into storage-side and in-process predicates."""

    def __init__(
        self,
        fields: Sequence[FilterField],
        fixed_rules: Iterable[FilterRule] = ()
    ):
        self.fields = tuple(fields)
        self.fixed_rules = tuple(fixed_rules)

    def compile(self, spec: "ListFilterSpec") -> CompiledFilters:
        storage = [r for r in self.fixed_rules if r.placement is Placement.STORAGE]
        in_process = [r for r in self.fixed_rules if r.placement is Placement.IN_PROCESS]
        applied: Dict[str, Any] = {}

        for filter_field in self.fields:
            rule = self._compile_field(filter_field, spec)
            if rule is None:
                continue

            if rule.placement is Placement.STORAGE:
                storage.append(rule)
            else:
                in_process.append(rule)

            if rule.kind is RuleKind.RANGE:
                low, high = rule.value
                if low is not None:
                    applied[filter_field.wire_name] = low
                if high is not None:
                    applied[to_camel(filter_field.upper_param)] = high
            else:
                applied[filter_field.wire_name] = rule.value

        return CompiledFilters(
            storage=Predicate(tuple(storage)),
            in_process=Predicate(tuple(in_process)),
            applied=applied
        )

    def _compile_field(self, filter_field: FilterField, spec: Any) -> Optional[FilterRule]:
        value = getattr(spec, filter_field.param, None)

        if filter_field.kind is RuleKind.RANGE:
            high = getattr(spec, filter_field.upper_param, None) if filter_field.upper_param else None
            if value is None and high is None:
                return None
            value = (value, high)
        elif isinstance(value, str):
            value = value.strip()
            # Too short to apply yet: absent, not "match nothing"
            if not value or len(value) < filter_field.min_length:
                return None
        elif value is None:
            return None
        elif filter_field.only_if_true and value is not True:
            return None

        return FilterRule(
            name=filter_field.wire_name,
            kind=filter_field.kind,
            fields=filter_field.fields,
            value=value,
            placement=filter_field.placement
        )


class ListFilterSpec(BaseModel):
    """
    Base for list request filters: immutable, camelCase on the wire.

    Use build() to construct from request values; it raises the service
    ValidationError instead of pydantic's.
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore"
    )

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)

    @classmethod
    def build(cls, **values: Any):
        try:
            return cls(**{k: v for k, v in values.items() if v is not None})
        except PydanticValidationError as e:
            errors = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'spec'}: {err['msg']}"
                for err in e.errors()
            )
            raise ValidationError(f"Invalid filters: {errors}") from e


class FilterSpec(ListFilterSpec):
    """Filters for the position candidate matching endpoint."""
    search: Optional[str] = None
    name_filter: Optional[str] = None
    email_filter: Optional[str] = None
    phone_filter: Optional[str] = None
    experience_filter: Optional[str] = None
    availability_filter: Optional[Literal["Full-Time", "Part-Time"]] = None
    weekend_availability_filter: Optional[bool] = None
    city_filter: Optional[str] = None
    province_filter: Optional[str] = None
    only_available: bool = False

    @field_validator(
        "experience_filter", "availability_filter", "weekend_availability_filter",
        mode="before"
    )
    @classmethod
    def _blank_choice_is_absent(cls, value: Any) -> Any:
        if isinstance(value, str) and value.strip().lower() in _ALL_VALUES:
            return None
        return value


class ProfileFilterSpec(ListFilterSpec):
    """Filters for the jobseeker profile list endpoint."""
    search: Optional[str] = None
    name_filter: Optional[str] = None
    email_filter: Optional[str] = None
    phone_filter: Optional[str] = None
    location_filter: Optional[str] = None
    experience_filter: Optional[str] = None
    employee_id_filter: Optional[str] = None
    status_filter: Optional[Literal["pending", "verified", "rejected"]] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None

    @field_validator("status_filter", "experience_filter", mode="before")
    @classmethod
    def _blank_choice_is_absent(cls, value: Any) -> Any:
        if isinstance(value, str) and value.strip().lower() in _ALL_VALUES:
            return None
        return value

    @model_validator(mode="after")
    def _check_date_range(self):
        if self.date_from and self.date_to and self.date_from > self.date_to:
            raise ValueError("dateFrom must not be after dateTo")
        return self


def candidate_filter_fields(thresholds: FilterThresholds) -> Tuple[FilterField, ...]:
    text = thresholds.min_text_length
    location = thresholds.min_location_length
    return (
        FilterField(
            "search", RuleKind.SUBSTRING,
            ("name", "email", "phone_number", "bio", "experience", "availability", "city", "province"),
            Placement.IN_PROCESS, min_length=text
        ),
        # Display name is derived from first + last name, not a stored column
        FilterField("name_filter", RuleKind.SUBSTRING, ("name",), Placement.IN_PROCESS, min_length=text),
        FilterField("email_filter", RuleKind.SUBSTRING, ("email",), Placement.IN_PROCESS, min_length=text),
        FilterField("phone_filter", RuleKind.SUBSTRING, ("phone_number",), Placement.IN_PROCESS, min_length=text),
        FilterField("experience_filter", RuleKind.EXACT, ("experience",), Placement.STORAGE),
        FilterField("availability_filter", RuleKind.EXACT, ("availability",), Placement.STORAGE),
        FilterField("weekend_availability_filter", RuleKind.EXACT, ("weekend_availability",), Placement.STORAGE),
        FilterField("city_filter", RuleKind.SUBSTRING, ("city",), Placement.STORAGE, min_length=location),
        FilterField("province_filter", RuleKind.SUBSTRING, ("province",), Placement.STORAGE, min_length=location),
        FilterField("only_available", RuleKind.EXACT, ("is_available",), Placement.STORAGE, only_if_true=True),
    )


# Only verified profiles are offered as candidates
VERIFIED_ONLY = FilterRule(
    name="verificationStatus",
    kind=RuleKind.EXACT,
    fields=("verification_status",),
    value="verified",
    placement=Placement.STORAGE
)


def candidate_compiler(thresholds: Optional[FilterThresholds] = None) -> PredicateCompiler:
    return PredicateCompiler(
        candidate_filter_fields(thresholds or FilterThresholds()),
        fixed_rules=(VERIFIED_ONLY,)
    )


def profile_compiler(thresholds: Optional[FilterThresholds] = None) -> PredicateCompiler:
    thresholds = thresholds or FilterThresholds()
    text = thresholds.min_text_length
    location = thresholds.min_location_length
    return PredicateCompiler((
        FilterField(
            "search", RuleKind.SUBSTRING,
            ("name", "email", "employee_id", "city", "province"),
            Placement.IN_PROCESS, min_length=text
        ),
        FilterField("name_filter", RuleKind.SUBSTRING, ("name",), Placement.IN_PROCESS, min_length=text),
        FilterField("email_filter", RuleKind.SUBSTRING, ("email",), Placement.IN_PROCESS, min_length=text),
        FilterField("phone_filter", RuleKind.SUBSTRING, ("mobile",), Placement.IN_PROCESS, min_length=text),
        FilterField("employee_id_filter", RuleKind.SUBSTRING, ("employee_id",), Placement.IN_PROCESS, min_length=text),
        FilterField(
            "location_filter", RuleKind.SUBSTRING, ("city", "province"),
            Placement.STORAGE, min_length=location
        ),
        FilterField("experience_filter", RuleKind.EXACT, ("experience",), Placement.STORAGE),
        FilterField("status_filter", RuleKind.EXACT, ("verification_status",), Placement.STORAGE),
        FilterField(
            "date_from", RuleKind.RANGE, ("created_at",), Placement.STORAGE,
            upper_param="date_to"
        ),
    ))


def _read_field(record: Any, name: str) -> Any:
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


def _in_range(value: Any, low: Any, high: Any) -> bool:
    # Date bounds against timestamps compare on the calendar day
    if isinstance(value, datetime) and any(
        isinstance(b, date) and not isinstance(b, datetime) for b in (low, high)
    ):
        value = value.date()
    if low is not None and value < low:
        return False
    if high is not None and value > high:
        return False
    return True
