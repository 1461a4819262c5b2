import uuid
from urllib.parse import quote

from .constants import MAPS_SEARCH_URL

# Characters left unescaped by JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


def generate_id() -> str:
    """Generate a unique id for jobs, rules and clients"""
    return str(uuid.uuid4())


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_maps_url(street: str, house_number: str) -> str:
    """Google Maps search link for an address"""
    return f"{MAPS_SEARCH_URL}{encode_uri_component(f'{house_number} {street}')}"
