"""Small HTML element builder for Shoelace components with htmx attributes.

Attribute values are always escaped. Inner HTML is inserted as given, so
callers escape any text they pass in.
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Any

_HX_FIELDS = ("get", "post", "put", "delete", "patch", "trigger", "target", "swap", "indicator", "confirm")
_HX_ACTIONS = ("get", "post", "put", "delete", "patch")


def escape(value: Any) -> str:
    """Escape ``&``, ``<``, ``>`` and both quote characters."""
    return html.escape(str(value), quote=True)


def render_element(tag: str, attributes: dict[str, Any] | None = None, inner_html: str | None = None) -> str:
    """Render ``<tag attrs>inner_html</tag>``.

    ``True`` renders a bare attribute name, ``False`` and ``None`` drop the
    attribute, anything else becomes ``name="escaped value"``.
    """
    parts = []
    for name, value in (attributes or {}).items():
        if value is False or value is None:
            continue
        if value is True:
            parts.append(name)
        else:
            parts.append(f'{name}="{escape(value)}"')
    attrs = f" {' '.join(parts)}" if parts else ""
    return f"<{tag}{attrs}>{inner_html or ''}</{tag}>"


@dataclass
class HxAttributes:
    """The htmx attributes the builders understand.

    Each field maps to ``hx-<name>``; unset fields are not rendered.
    """

    get: str | None = None
    post: str | None = None
    put: str | None = None
    delete: str | None = None
    patch: str | None = None
    trigger: str | None = None
    target: str | None = None
    swap: str | None = None
    indicator: str | None = None
    confirm: str | None = None

    def has_action(self) -> bool:
        return any(getattr(self, name) for name in _HX_ACTIONS)

    def to_attributes(self) -> dict[str, str]:
        return {f"hx-{name}": getattr(self, name) for name in _HX_FIELDS if getattr(self, name)}


@dataclass
class ButtonOptions:
    """Options for ``<sl-button>``.

    Attributes:
        label: Button text, escaped on render.
        variant: Shoelace variant (``default``, ``primary``, ``success``,
            ``neutral``, ``warning``, ``danger``, ``text``).
        size: ``small``, ``medium`` or ``large``.
        type: ``button``, ``submit`` or ``reset``.
        disabled, loading, outline, circle: Boolean Shoelace flags.
        hx: htmx behaviour of the button.
        extra: Any other attribute, rendered as-is (escaped).
    """

    label: str
    id: str | None = None
    variant: str | None = None
    size: str | None = None
    type: str | None = None
    disabled: bool = False
    loading: bool = False
    outline: bool = False
    circle: bool = False
    hx: HxAttributes = field(default_factory=HxAttributes)
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class CheckboxOptions:
    """Options for ``<sl-checkbox>``.

    When ``hx`` carries an action and no trigger, the trigger defaults to
    ``sl-change``. ``label_html`` replaces the escaped ``label`` for callers
    that need markup inside the checkbox.
    """

    label: str = ""
    label_html: str | None = None
    id: str | None = None
    name: str | None = None
    value: str | None = None
    checked: bool = False
    disabled: bool = False
    indeterminate: bool = False
    hx: HxAttributes = field(default_factory=HxAttributes)
    extra: dict[str, Any] = field(default_factory=dict)


def render_button(options: ButtonOptions) -> str:
    attributes: dict[str, Any] = dict(options.extra)
    attributes.update(
        {
            "id": options.id,
            "variant": options.variant,
            "size": options.size,
            "type": options.type,
            "disabled": options.disabled,
            "loading": options.loading,
            "outline": options.outline,
            "circle": options.circle,
        }
    )
    attributes.update(options.hx.to_attributes())
    return render_element("sl-button", attributes, escape(options.label))


def render_checkbox(options: CheckboxOptions) -> str:
    attributes: dict[str, Any] = dict(options.extra)
    attributes.update(
        {
            "id": options.id,
            "name": options.name,
            "value": options.value,
            "checked": options.checked,
            "disabled": options.disabled,
            "indeterminate": options.indeterminate,
        }
    )
    hx = options.hx.to_attributes()
    if options.hx.has_action() and not options.hx.trigger:
        hx["hx-trigger"] = "sl-change"
    attributes.update(hx)
    label = options.label_html if options.label_html is not None else escape(options.label)
    return render_element("sl-checkbox", attributes, label)


def render_icon(name: str, slot: str | None = None) -> str:
    return render_element("sl-icon", {"slot": slot, "name": name})
