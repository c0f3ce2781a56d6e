"""Summary data derived from the document content."""
from typing import Sequence

from htmlbom.pcb.models import BomRow, Footprint


def collect_nets(footprints: Sequence[Footprint]) -> list[str]:
    """Distinct pad net names in first-seen order (footprint order, then pad order)."""
    nets: list[str] = []
    seen: set[str] = set()
    for footprint in footprints:
        for pad in footprint.pads:
            if pad.net is not None and pad.net not in seen:
                seen.add(pad.net)
                nets.append(pad.net)
    return nets


def collect_dnp_ids(footprints: Sequence[Footprint]) -> list[int]:
    """IDs of footprints which are not mounted."""
    return [index for index, footprint in enumerate(footprints) if not footprint.mount]


def detect_layer_view(bom_front: Sequence[BomRow], bom_back: Sequence[BomRow]) -> str:
    """
    Pick the board side(s) shown by default.

    Returns "F" if only front rows exist, "B" if only back rows exist and
    "FB" otherwise (both populated or both empty).
    """
    if bom_front and not bom_back:
        return "F"
    if bom_back and not bom_front:
        return "B"
    return "FB"
