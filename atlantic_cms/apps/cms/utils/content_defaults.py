"""
Default content fallback layer

Every field falls back on its own: a section that only sets "heading" renders
that heading next to the built-in value of every other field.
"""
from typing import Any, Dict, List, Mapping, Optional, Tuple


def pick(record: Optional[Mapping[str, Any]], key: str, default: Any) -> Any:
    """
    Return record[key] when the record has a value for key, else default.

    JSON null counts as "no value" (JSON has no undefined to tell them apart).
    """
    if not record:
        return default
    value = record.get(key)
    if value is None:
        return default
    return value


def get_string(record: Optional[Mapping[str, Any]], key: str, default: str) -> str:
    value = pick(record, key, default)
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return default


def get_number(record: Optional[Mapping[str, Any]], key: str, default: float) -> float:
    """Numbers are often stored as strings by the editor ("0.6")."""
    value = pick(record, key, default)
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return default
    return default


def get_string_list(record: Optional[Mapping[str, Any]], key: str, default: List[str]) -> List[str]:
    value = pick(record, key, default)
    if not isinstance(value, list):
        return default
    return [str(item) for item in value if item is not None]


def merge_with_defaults(record: Optional[Mapping[str, Any]], defaults: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Field-level merge used by the rendered endpoint.

    Every default key goes through pick(); authored keys without a default
    are passed through untouched.
    """
    merged = {key: pick(record, key, default) for key, default in defaults.items()}
    for key, value in (record or {}).items():
        if key not in merged and value is not None:
            merged[key] = value
    return merged


DEFAULT_FEATURED_PROJECTS = [
    {"id": 1, "title": "Coastal Luxury Resort", "category": "Tourism Media", "image": "https://images.unsplash.com/photo-1566073771259-6a8506099945?w=800&q=80"},
    {"id": 2, "title": "Tech Summit 2024", "category": "Event Coverage", "image": "https://images.unsplash.com/photo-1540575467063-178a50c2df87?w=800&q=80"},
    {"id": 3, "title": "Artisan Coffee Brand", "category": "Commercial", "image": "https://images.unsplash.com/photo-1495474472287-4d71bcdd2085?w=800&q=80"},
    {"id": 4, "title": "Mountain Documentary", "category": "Documentary", "image": "https://images.unsplash.com/photo-1464822759023-fed622ff2c3b?w=800&q=80"},
    {"id": 5, "title": "Fashion Week Editorial", "category": "Photography", "image": "https://images.unsplash.com/photo-1558618666-fcd25c85cd64?w=800&q=80"},
    {"id": 6, "title": "Podcast Studio Session", "category": "Podcast", "image": "https://images.unsplash.com/photo-1478737270239-2f02b77fc618?w=800&q=80"},
]

DEFAULT_TEAM_MEMBERS = [
    {"name": "Alex Rivera", "role": "Creative Director", "image": "https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?w=400&q=80"},
    {"name": "Sarah Chen", "role": "Lead Cinematographer", "image": "https://images.unsplash.com/photo-1494790108377-be9c29b29330?w=400&q=80"},
    {"name": "Marcus Williams", "role": "Post-Production Lead", "image": "https://images.unsplash.com/photo-1472099645785-5658abf4ff4e?w=400&q=80"},
    {"name": "Emma Thompson", "role": "Producer", "image": "https://images.unsplash.com/photo-1438761681033-6461ffad8d80?w=400&q=80"},
]

# Built-in copy rendered when a field has no authored value, keyed by (page slug, section name)
DEFAULT_SECTION_CONTENT: Dict[Tuple[str, str], Dict[str, Any]] = {
    ("home", "hero"): {
        "label": "Full-Service Media Production",
        "heading": "Cinematic Stories. Impactful Visuals. Complete Media Solutions.",
        "subheading": (
            "We bring your brand, events, and vision to life through cinematic photography, "
            "video, and studio-grade audio. Premium quality for visionaries who demand excellence."
        ),
        "buttonText": "Explore Portfolio",
        "buttonUrl": "/portfolio",
        "secondaryButtonText": "Book a Project",
        "secondaryButtonUrl": "/contact",
        "stats": [
            {"value": "150+", "label": "Projects Delivered"},
            {"value": "50+", "label": "Brand Partners"},
            {"value": "25+", "label": "Creator Network"},
            {"value": "5+", "label": "Years Experience"},
        ],
    },
    ("home", "services"): {
        "label": "Our Services",
        "heading": "Complete Media Solutions",
        "subheading": "From concept to delivery, we offer end-to-end media production services.",
    },
    ("home", "featured-work"): {
        "label": "Portfolio",
        "heading": "Our Work Speaks For Us",
        "subheading": "A curated selection of our best photography, videography, and documentary work.",
        "projects": DEFAULT_FEATURED_PROJECTS,
    },
    ("home", "cta"): {
        "heading": "Ready to Create Something Unforgettable?",
        "body": (
            "Let's bring your vision to life. Whether you need brand content, event coverage, "
            "or a full documentary, we're ready to deliver excellence."
        ),
        "buttonText": "Book a Project",
        "buttonUrl": "/contact",
        "secondaryHeading": "Join Our Creators Collective",
        "secondaryBody": (
            "Are you a talented photographer, videographer, or editor? Join our network of "
            "professionals and collaborate on high-profile projects with reliable payments."
        ),
        "secondaryButtonText": "Apply Now",
        "secondaryButtonUrl": "/creators",
    },
    ("about", "team"): {
        "label": "Our Team",
        "heading": "Meet the Creators",
        "subheading": "The talented individuals who bring your vision to life.",
        "members": DEFAULT_TEAM_MEMBERS,
    },
    ("portfolio", "hero"): {
        "label": "Our Work",
        "heading": "Portfolio",
        "body": (
            "A curated selection of our best photography, videography, documentaries, "
            "corporate campaigns, and event coverage."
        ),
    },
}


def get_section_defaults(page_slug: str, section_name: str) -> Dict[str, Any]:
    return DEFAULT_SECTION_CONTENT.get((page_slug, section_name), {})
