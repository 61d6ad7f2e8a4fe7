"""Postcode to hearing venue lookup (AIR lookup table)."""

import csv
import logging
from pathlib import Path
from typing import Dict, Optional

from ..models.robotics import AirlookupBenefitToVenue
from ..utils.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_VENUE = "Birmingham"


def get_first_half_of_postcode(postcode: Optional[str]) -> str:
    """
    Return the outward code of a UK postcode.

    "TS1 1ST" and "TS11ST" both give "TS1".
    """
    if not postcode:
        return ""
    trimmed = postcode.strip()
    if " " in trimmed:
        return trimmed.split(" ")[0]
    if len(trimmed) > 3:
        return trimmed[:-3]
    return trimmed


class AirLookupService:
    """
    Resolves a postcode to the PIP and ESA hearing venues.

    The lookup table is a CSV with a ``postcode,pip_venue,esa_venue`` header,
    keyed by outward code. Unknown outward codes fall back to the default venue.
    """

    def __init__(self, csv_path: str, default_venue: str = DEFAULT_VENUE):
        self.csv_path = Path(csv_path)
        self.default_venue = default_venue
        self._venues: Dict[str, AirlookupBenefitToVenue] = self._load(self.csv_path)

        logger.info(
            f"Initialized AirLookupService: {len(self._venues)} outcodes from {self.csv_path}"
        )

    @staticmethod
    def _load(csv_path: Path) -> Dict[str, AirlookupBenefitToVenue]:
        if not csv_path.exists():
            raise ConfigurationError.missing(str(csv_path))

        venues: Dict[str, AirlookupBenefitToVenue] = {}
        with open(csv_path, 'r', encoding='utf-8', newline='') as f:
            for row in csv.DictReader(f):
                outcode = (row.get("postcode") or "").strip().lower()
                if not outcode:
                    continue
                venues[outcode] = AirlookupBenefitToVenue(
                    pip_venue=(row.get("pip_venue") or "").strip(),
                    esa_venue=(row.get("esa_venue") or "").strip(),
                )
        return venues

    def lookup_air_venue_name_by_postcode(self, postcode: Optional[str]) -> AirlookupBenefitToVenue:
        """
        Look up the hearing venues for a postcode.

        Args:
            postcode: Appellant postcode, with or without the space

        Returns:
            Venues for the postcode's outward code, or the default venue for both
        """
        outcode = get_first_half_of_postcode(postcode).lower()
        venue = self._venues.get(outcode)
        if venue is None:
            logger.warning(f"No AIR lookup venue for outcode '{outcode}', using {self.default_venue}")
            return AirlookupBenefitToVenue(pip_venue=self.default_venue, esa_venue=self.default_venue)
        return venue
