from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from massing.models.building import Building, Ring


@dataclass(frozen=True)
class ImportedSite:
    """
    Fully parsed import payload, ready to replace a document's contents

    Attributes:
        buildings: Site boundary first, then the imported buildings
        roads: Road polylines in planar coordinates
        location: Mean latitude/longitude of the site boundary
    """
    buildings: Tuple[Building, ...]
    roads: Tuple[Ring, ...]
    location: Optional[Dict[str, float]] = None

    @property
    def site(self) -> Building:
        return self.buildings[0]
