"""Density-aware variant selection.

This module picks the best variant of an asset for a target device
pixel ratio.

Main assets are presumed to match a nominal pixel ratio of 1.0. On a
screen whose ratio does not exactly match an available variant, the
"best match" depends on the screen. Low-density screens (ratio strictly
below 2.0) show upscaling artifacts clearly, so the next higher variant
is chosen even when a lower one is closer. Higher-density screens get
the nearest variant, with ties at the midpoint going to the lower one.

For variants at 1.0, 2.0 and 4.0:
    target 1.25 -> 2.0 (low-density screen, round up)
    target 2.25 -> 2.0 (nearest; midpoint is 3.0)
    target 3.25 -> 4.0 (past the midpoint)
"""

import bisect
import logging

from .core.types import VariantRecord

logger = logging.getLogger(__name__)

# Main assets are authored for a device pixel ratio of 1.0
NATURAL_RESOLUTION = 1.0

# Screens with a device pixel ratio strictly below this are low-density
LOW_DENSITY_LIMIT = 2.0


class DensityIndex:
    """Variants of one asset keyed by density, in ascending order.

    Built for a single resolution and then discarded. Later records
    replace earlier ones at the same density.
    """

    def __init__(self, variants: list[VariantRecord]):
        self._by_density: dict[float, VariantRecord] = {}
        for variant in variants:
            self._by_density[variant.density] = variant
        self._densities = sorted(self._by_density)

    def setdefault(self, variant: VariantRecord) -> VariantRecord:
        """Insert a variant unless its density is already indexed."""
        if variant.density not in self._by_density:
            self._by_density[variant.density] = variant
            bisect.insort(self._densities, variant.density)
        return self._by_density[variant.density]

    def __contains__(self, density: object) -> bool:
        return density in self._by_density

    def __getitem__(self, density: float) -> VariantRecord:
        return self._by_density[density]

    def __len__(self) -> int:
        return len(self._densities)

    def densities(self) -> list[float]:
        return list(self._densities)

    def last_key_before(self, value: float) -> float | None:
        """Greatest indexed density strictly below value."""
        position = bisect.bisect_left(self._densities, value)
        return self._densities[position - 1] if position > 0 else None

    def first_key_after(self, value: float) -> float | None:
        """Smallest indexed density strictly above value."""
        position = bisect.bisect_right(self._densities, value)
        return self._densities[position] if position < len(self._densities) else None


class VariantResolver:
    """Chooses the variant of an asset that best fits a target density.

    This component never fails: when nothing better can be determined
    it returns the main asset at density 1.0.

    Example:
        >>> resolver = VariantResolver()
        >>> variants = [VariantRecord('heart.png', 1.0), VariantRecord('2.0x/heart.png', 2.0)]
        >>> resolver.choose_variant('heart.png', variants, 1.25).path
        '2.0x/heart.png'
    """

    def __init__(self, low_density_limit: float = LOW_DENSITY_LIMIT):
        """Initialize the resolver.

        Args:
            low_density_limit: Targets strictly below this always round up
                to the next higher variant
        """
        self.low_density_limit = low_density_limit

    def choose_variant(
        self,
        key: str,
        candidate_variants: list[VariantRecord],
        target_density: float | None,
    ) -> VariantRecord:
        """Choose the best variant of an asset for a target density.

        Args:
            key: Main asset key, also used as the 1.0 baseline path
            candidate_variants: Variants listed in the manifest for the key
            target_density: Device pixel ratio of the screen, or None if unknown

        Returns:
            The chosen variant record
        """
        main_asset = VariantRecord(path=key, density=NATURAL_RESOLUTION)
        if target_density is None or not candidate_variants:
            return main_asset

        index = DensityIndex(candidate_variants)
        index.setdefault(main_asset)

        # TODO: honor locale, text direction and requested size once manifests carry them
        chosen = self.find_best_variant(index, target_density)
        logger.debug(
            "Chose %s (%.2fx) for %s at %.2fx from %s",
            chosen.path,
            chosen.density,
            key,
            target_density,
            index.densities(),
        )
        return chosen

    def find_best_variant(self, index: DensityIndex, value: float) -> VariantRecord:
        """Return the best variant in a non-empty density index.

        The best variant is chosen as follows:
        - A variant whose density equals value exactly, if available.
        - If value is below the lowest density, the lowest variant.
        - If value is above the highest density, the highest variant.
        - On a low-density screen, the lowest variant above value.
        - Otherwise the nearest variant; the lower one at the midpoint.
        """
        if value in index:
            return index[value]

        lower = index.last_key_before(value)
        upper = index.first_key_after(value)
        if lower is None:
            return index[upper]  # type: ignore[index]
        if upper is None:
            return index[lower]

        if value < self.low_density_limit or value > (lower + upper) / 2:
            return index[upper]
        return index[lower]
