# stamper/models/variants.py

import logging
from typing import Dict, List, Optional, Tuple

from stamper.config import Config
from stamper.models.stamp import BuildVariant, InvalidInput


# A distribution channel. Flavors never influence the version code or name.
class Flavor:
    def __init__(self, name: str, application_id: str, dimension: str = "dist"):
        self.name = name
        self.application_id = application_id
        self.dimension = dimension

    def variant_name(self, build_type: BuildVariant) -> str:
        return f"{self.name}{build_type.title}"

    def to_dict(self) -> Dict[str, str]:
        return {
            'name': self.name,
            'applicationId': self.application_id,
            'dimension': self.dimension,
        }


def _build_registry(flavor_names: List[str], base_application_id: str) -> Dict[str, Flavor]:
    registry: Dict[str, Flavor] = {}
    for raw in flavor_names:
        name = raw.strip()
        if not name:
            continue
        # Distinct application id per flavor for side-by-side installs
        registry[name] = Flavor(name, f"{base_application_id}.{name}")
    return registry


# Registry of flavor name -> Flavor, built from configuration.
FLAVORS: Dict[str, Flavor] = _build_registry(Config.FLAVORS, Config.APPLICATION_ID)


def get_flavor(name: str) -> Optional[Flavor]:
    """Returns the registered flavor with this name, or None."""
    return FLAVORS.get(name)


def resolve_variant(name: str) -> Tuple[Optional[str], BuildVariant]:
    """Splits a variant name into (flavor, build type).

    Accepts bare build types ('release', 'Debug') and combined names where the
    build type is a capitalized suffix ('playRelease', 'ossDebug'). The flavor
    prefix does not have to be registered; it carries no effect on versioning.
    """
    if not isinstance(name, str) or not name.strip():
        raise InvalidInput("Variant name must be a non-empty string")
    name = name.strip()

    if name.lower() in {v.value for v in BuildVariant}:
        return None, BuildVariant.parse(name)

    for build_type in BuildVariant:
        suffix = build_type.title
        if name.endswith(suffix) and len(name) > len(suffix):
            flavor = name[:-len(suffix)]
            if flavor not in FLAVORS:
                logging.debug(f"[VARIANTS] '{flavor}' is not a registered flavor; stamping anyway.")
            return flavor, build_type

    raise InvalidInput(f"Cannot determine build type of variant '{name}'")


def all_variant_names() -> List[str]:
    """Returns every flavor x build type combination, or the bare build types if no flavors exist."""
    if not FLAVORS:
        return [v.value for v in BuildVariant]
    return [flavor.variant_name(build_type) for flavor in FLAVORS.values() for build_type in BuildVariant]
