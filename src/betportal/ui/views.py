"""
View objects returned by ``render()`` and their HTML serialization.

Every view is wrapped in the same page shell, so the placeholder produced by
the server pass and the interactive view produced after attach differ only
inside the card.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from html import escape

from betportal.ui.form import FieldSpec

SHELL_OPEN = '<div class="page-shell"><div class="page-card">'
SHELL_CLOSE = "</div></div>"


def page_shell(body: str) -> str:
    return f"{SHELL_OPEN}{body}{SHELL_CLOSE}"


@dataclass(frozen=True)
class PlaceholderView:
    """Skeleton shown until the page is attached.

    One label bar and one input bar per field, then one bar for the submit
    control, mirroring the interactive form's layout.
    """

    field_count: int
    interactive: bool = field(default=False, init=False)

    def to_html(self) -> str:
        rows = "".join(
            '<div class="skeleton skeleton-label"></div>'
            '<div class="skeleton skeleton-input"></div>'
            for _ in range(self.field_count)
        )
        body = (
            '<div class="skeleton-group" aria-busy="true">'
            '<div class="skeleton skeleton-title"></div>'
            f'<div class="skeleton-rows">{rows}'
            '<div class="skeleton skeleton-input"></div></div>'
            "</div>"
        )
        return page_shell(body)


@dataclass(frozen=True)
class FieldView:
    spec: FieldSpec
    value: str = ""
    disabled: bool = False

    def to_html(self) -> str:
        s = self.spec
        attrs = [
            f'id="{escape(s.name)}"',
            f'name="{escape(s.name)}"',
            f'type="{escape(s.input_type)}"',
            f'value="{escape(self.value)}"',
        ]
        if s.placeholder:
            attrs.append(f'placeholder="{escape(s.placeholder)}"')
        if s.autocomplete:
            attrs.append(f'autocomplete="{escape(s.autocomplete)}"')
        if s.required:
            attrs.append("required")
        if s.min_length is not None:
            attrs.append(f'minlength="{s.min_length}"')
        if self.disabled:
            attrs.append("disabled")
        return (
            '<div class="field">'
            f'<label for="{escape(s.name)}">{escape(s.label)}</label>'
            f"<input {' '.join(attrs)}>"
            "</div>"
        )


@dataclass(frozen=True)
class LinkView:
    href: str
    text: str
    prompt: str = ""

    def to_html(self) -> str:
        prompt = f"{escape(self.prompt)} " if self.prompt else ""
        return f'<p class="link">{prompt}<a href="{escape(self.href)}">{escape(self.text)}</a></p>'


@dataclass(frozen=True)
class FormView:
    """Interactive auth form."""

    title: str
    fields: tuple[FieldView, ...]
    submit_label: str
    submit_disabled: bool = False
    error: str | None = None
    links: tuple[LinkView, ...] = ()
    interactive: bool = field(default=True, init=False)

    def to_html(self) -> str:
        error = (
            f'<div class="form-error" role="alert" aria-live="polite"><p>{escape(self.error)}</p></div>'
            if self.error
            else ""
        )
        fields = "".join(f.to_html() for f in self.fields)
        disabled = " disabled" if self.submit_disabled else ""
        links = "".join(link.to_html() for link in self.links)
        body = (
            f"<h1>{escape(self.title)}</h1>"
            f'<form method="post">{error}{fields}'
            f'<button type="submit"{disabled}>{escape(self.submit_label)}</button>'
            f"</form>{links}"
        )
        return page_shell(body)


@dataclass(frozen=True)
class ContentView:
    """Plain content block for non-form pages."""

    title: str
    body: str = ""
    interactive: bool = field(default=True, init=False)

    def to_html(self) -> str:
        return page_shell(f"<h1>{escape(self.title)}</h1><p>{escape(self.body)}</p>")


View = PlaceholderView | FormView | ContentView


def render_document(title: str, view: View) -> str:
    """Full HTML document for the server pass."""
    return (
        "<!DOCTYPE html>"
        '<html lang="en"><head><meta charset="utf-8">'
        f"<title>{escape(title)}</title></head>"
        f'<body><div id="root">{view.to_html()}</div></body></html>'
    )
