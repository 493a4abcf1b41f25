"""
Form field declarations and the mutable form state of a page.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FieldSpec:
    """Static description of one input field."""

    name: str
    label: str
    input_type: str = "text"
    placeholder: str = ""
    autocomplete: str | None = None
    required: bool = True
    min_length: int | None = None


@dataclass
class FormState:
    """Named string fields edited by the user. Unknown names are rejected."""

    values: dict[str, str] = field(default_factory=dict)

    @classmethod
    def for_fields(cls, specs: tuple[FieldSpec, ...]) -> "FormState":
        return cls(values={spec.name: "" for spec in specs})

    def update(self, name: str, value: str) -> None:
        if name not in self.values:
            raise KeyError(f"Unknown form field: {name}")
        self.values[name] = value

    def get(self, name: str) -> str:
        return self.values[name]

    def as_dict(self) -> dict[str, str]:
        return dict(self.values)
