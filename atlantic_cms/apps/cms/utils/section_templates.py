"""
Section editor templates

The editor picks its form from the section name: the first template key (in
the order of SECTION_TEMPLATES) contained in the lowercased name wins. A
section called "podcast-studio" therefore gets the podcast form because
"podcast" is declared before "studio".
"""
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
import json
import logging

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class FieldKind(str, Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    URL = "url"
    IMAGE = "image"
    VIDEO = "video"
    COLOR = "color"
    SELECT = "select"
    NUMBER = "number"


class FieldDescriptor(BaseModel):
    key: str
    label: str
    kind: FieldKind
    options: Optional[List[str]] = None
    min: Optional[float] = None
    max: Optional[float] = None


def _text(key: str, label: str) -> FieldDescriptor:
    return FieldDescriptor(key=key, label=label, kind=FieldKind.TEXT)


def _textarea(key: str, label: str) -> FieldDescriptor:
    return FieldDescriptor(key=key, label=label, kind=FieldKind.TEXTAREA)


def _url(key: str, label: str) -> FieldDescriptor:
    return FieldDescriptor(key=key, label=label, kind=FieldKind.URL)


def _image(key: str, label: str) -> FieldDescriptor:
    return FieldDescriptor(key=key, label=label, kind=FieldKind.IMAGE)


def _video(key: str, label: str) -> FieldDescriptor:
    return FieldDescriptor(key=key, label=label, kind=FieldKind.VIDEO)


def _color(key: str, label: str) -> FieldDescriptor:
    return FieldDescriptor(key=key, label=label, kind=FieldKind.COLOR)


def _select(key: str, label: str, options: List[str]) -> FieldDescriptor:
    return FieldDescriptor(key=key, label=label, kind=FieldKind.SELECT, options=options)


def _opacity(key: str = "overlayOpacity", label: str = "Overlay Opacity") -> FieldDescriptor:
    return FieldDescriptor(key=key, label=label, kind=FieldKind.NUMBER, min=0, max=1)


BUTTON_STYLES = ["primary", "secondary", "outline", "ghost"]
LAYOUTS = ["grid", "list", "carousel"]

# Declaration order is the match order; keep it a list.
SECTION_TEMPLATES: List[Tuple[str, List[FieldDescriptor]]] = [
    ("hero", [
        _text("label", "Label (Small Text Above Heading)"),
        _text("heading", "Heading"),
        _textarea("subheading", "Subheading"),
        _text("buttonText", "Primary Button Text"),
        _url("buttonUrl", "Primary Button URL"),
        _select("buttonStyle", "Primary Button Style", BUTTON_STYLES),
        _text("secondaryButtonText", "Secondary Button Text"),
        _url("secondaryButtonUrl", "Secondary Button URL"),
        _image("backgroundImage", "Background Image"),
        _video("videoUrl", "Background Video"),
        _opacity(),
    ]),
    ("about", [
        _text("label", "Label"),
        _text("heading", "Heading"),
        _textarea("body", "Body"),
        _image("imageUrl", "Image"),
        _text("imageAlt", "Image Alt Text"),
        _text("yearsValue", "Years Value"),
        _text("yearsLabel", "Years Label"),
    ]),
    ("services", [
        _text("label", "Label"),
        _text("heading", "Heading"),
        _textarea("subheading", "Subheading"),
        _select("layout", "Layout", LAYOUTS),
    ]),
    ("cta", [
        _text("heading", "Heading"),
        _textarea("body", "Body"),
        _text("buttonText", "Button Text"),
        _url("buttonUrl", "Button URL"),
        _select("buttonStyle", "Button Style", BUTTON_STYLES),
        _text("secondaryHeading", "Secondary Heading"),
        _textarea("secondaryBody", "Secondary Body"),
        _text("secondaryButtonText", "Secondary Button Text"),
        _url("secondaryButtonUrl", "Secondary Button URL"),
        _color("backgroundColor", "Background Color"),
    ]),
    ("gallery", [
        _text("heading", "Heading"),
        _textarea("subheading", "Subheading"),
        _image("imageUrl", "Featured Image"),
        _select("layout", "Layout", LAYOUTS),
    ]),
    ("testimonials", [
        _text("label", "Label"),
        _text("heading", "Heading"),
        _textarea("subheading", "Subheading"),
        _color("backgroundColor", "Background Color"),
    ]),
    ("contact", [
        _text("heading", "Heading"),
        _textarea("body", "Body"),
        _text("email", "Contact Email"),
        _text("phone", "Phone"),
        _textarea("address", "Address"),
        _url("instagramUrl", "Instagram URL"),
    ]),
    ("features", [
        _text("label", "Label"),
        _text("heading", "Heading"),
        _textarea("subheading", "Subheading"),
        _image("imageUrl", "Image"),
    ]),
    ("podcast", [
        _text("heading", "Heading"),
        _textarea("body", "Body"),
        _video("videoUrl", "Showreel Video"),
        _image("imageUrl", "Cover Image"),
        _text("buttonText", "Button Text"),
        _url("buttonUrl", "Button URL"),
    ]),
    ("studio", [
        _text("heading", "Heading"),
        _textarea("body", "Body"),
        _image("imageUrl", "Studio Image"),
        _video("videoUrl", "Studio Tour Video"),
        _text("buttonText", "Booking Button Text"),
        _url("buttonUrl", "Booking URL"),
    ]),
    ("team", [
        _text("label", "Label"),
        _text("heading", "Heading"),
        _textarea("subheading", "Subheading"),
    ]),
    ("mission", [
        _text("label", "Label"),
        _text("heading", "Heading"),
        _textarea("body", "Mission Statement"),
        _image("imageUrl", "Image"),
    ]),
    ("benefits", [
        _text("label", "Label"),
        _text("heading", "Heading"),
        _textarea("subheading", "Subheading"),
        _color("backgroundColor", "Background Color"),
    ]),
    ("process", [
        _text("label", "Label"),
        _text("heading", "Heading"),
        _textarea("subheading", "Subheading"),
        _select("layout", "Layout", LAYOUTS),
    ]),
]

DEFAULT_TEMPLATE_KEY = "default"

DEFAULT_TEMPLATE: List[FieldDescriptor] = [
    _text("heading", "Heading"),
    _textarea("subheading", "Subheading"),
    _textarea("body", "Body"),
    _image("imageUrl", "Image"),
    _video("videoUrl", "Video"),
    _text("buttonText", "Button Text"),
    _url("buttonUrl", "Button URL"),
    _color("backgroundColor", "Background Color"),
    _image("backgroundImage", "Background Image"),
    _opacity(),
]


def infer_template(section_name: str) -> Tuple[str, List[FieldDescriptor]]:
    """Return (template key, fields) for a section name."""
    lowered = (section_name or "").lower()
    for key, fields in SECTION_TEMPLATES:
        if key in lowered:
            return key, fields
    return DEFAULT_TEMPLATE_KEY, DEFAULT_TEMPLATE


def hydrate_form_state(content: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Editor state is the whole stored record plus isPublished (true when missing or null)."""
    state = dict(content or {})
    # Non-boolean stored values are kept as-is
    if state.get("isPublished") is None:
        state["isPublished"] = True
    return state


def apply_raw_json(current_state: Dict[str, Any], raw_text: str) -> Tuple[Dict[str, Any], bool]:
    """
    Replace the editor state with raw JSON text.

    Invalid JSON, or JSON that is not an object, keeps current_state.
    Returns (state, applied).
    """
    try:
        parsed = json.loads(raw_text)
    except (TypeError, ValueError):
        logger.debug("Ignoring invalid raw JSON in section editor")
        return current_state, False

    if not isinstance(parsed, dict):
        return current_state, False

    return hydrate_form_state(parsed), True
