import copy
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

Fragment = Mapping[str, Any]


@dataclass(frozen=True)
class MergeOptions:
    """
    Controls how the fragments of a chain are combined.

    most_specific: return only the most specific fragment found.
    return_one: return only the least specific fragment found.
    cross_roots: merge the fragments of every root instead of taking,
        for each sublocale, the fragment of the first root that has one.
    """

    most_specific: bool = False
    return_one: bool = False
    cross_roots: bool = False


def merge(base: Fragment, override: Fragment) -> Dict[str, Any]:
    """
    Deep-merges two mappings into a new dict; `override` wins.

    Nested mappings present on both sides are merged recursively. Anything
    else, lists included, is replaced wholesale by the overriding value.
    Neither input is modified and the result shares no mutable state with
    them.
    """
    result: Dict[str, Any] = {key: copy.deepcopy(value) for key, value in base.items()}
    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            result[key] = merge(current, value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def select_fragments(
    layers: Sequence[Sequence[Optional[Fragment]]], cross_roots: bool = False
) -> List[Fragment]:
    """
    Flattens per-sublocale, per-root fragments into merge order.

    `layers` holds one entry per sublocale (least specific first), each a
    list with one slot per root (highest priority root first).
    """
    selected: List[Fragment] = []
    for layer in layers:
        if cross_roots:
            # Lower priority roots go first so that earlier roots override them.
            selected.extend(f for f in reversed(layer) if f is not None)
        else:
            found = next((f for f in layer if f is not None), None)
            if found is not None:
                selected.append(found)
    return selected


def merge_fragments(
    layers: Sequence[Sequence[Optional[Fragment]]],
    options: MergeOptions = MergeOptions(),
) -> Dict[str, Any]:
    fragments = select_fragments(layers, cross_roots=options.cross_roots)
    if not fragments:
        return {}
    if options.most_specific:
        return copy.deepcopy(dict(fragments[-1]))
    if options.return_one:
        return copy.deepcopy(dict(fragments[0]))

    result: Dict[str, Any] = {}
    for fragment in fragments:
        result = merge(result, fragment)
    return result
