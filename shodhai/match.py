"""Resolve scanned item names to catalog products before reconciliation."""
from typing import Optional, Dict, List, Tuple, Sequence

from rapidfuzz import process, fuzz

from .schemas import Product, ScanResult


def build_product_name_map(products: Sequence[Product]) -> Dict[str, str]:
    """
    [Product(id="1", name="Fresh Milk 1L"), ...] -> {"Fresh Milk 1L": "1", ...}
    Later duplicates of a name do not override the first product.
    """
    out: Dict[str, str] = {}
    for p in products:
        name = (p.name or "").strip()
        if name and name not in out:
            out[name] = p.id
    return out


def fuzzy_match_product(
    name_raw: str,
    product_map: Dict[str, str],
    score_cutoff: int = 85
) -> Tuple[Optional[str], float]:
    """
    Match name_raw against product_map keys with RapidFuzz WRatio.
    Returns: (product_id | None, score)
    """
    if not name_raw or not product_map:
        return None, 0.0

    best = process.extractOne(name_raw, list(product_map.keys()), scorer=fuzz.WRatio, score_cutoff=score_cutoff)
    if not best:
        return None, 0.0
    matched_name, score, _ = best
    return product_map.get(matched_name), float(score)


def substring_match_product(name_raw: str, products: Sequence[Product]) -> Optional[str]:
    """First product whose name contains name_raw, ignoring case."""
    needle = (name_raw or "").strip().lower()
    if not needle:
        return None
    for p in products:
        if needle in p.name.lower():
            return p.id
    return None


def attach_matches(scan: ScanResult, products: Sequence[Product], score_cutoff: int = 85) -> ScanResult:
    """
    Fill existing_product_id / is_existing on every detected item.
    Substring containment wins; fuzzy matching is the fallback.
    """
    product_map = build_product_name_map(products)
    items: List = []
    for item in scan.items:
        pid = substring_match_product(item.name, products)
        if pid is None:
            pid, _score = fuzzy_match_product(item.name, product_map, score_cutoff=score_cutoff)
        items.append(item.model_copy(update={
            "existing_product_id": pid,
            "is_existing": pid is not None
        }))
    return scan.model_copy(update={"items": items})
