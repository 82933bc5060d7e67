from strata.cache import MergeOptions, merge, merge_fragments, select_fragments


def test_more_specific_fragment_wins_and_nested_maps_merge():
    root = {"a": 1, "b": {"x": 1}}
    en_us = {"a": 2, "b": {"y": 2}}

    assert merge(root, en_us) == {"a": 2, "b": {"x": 1, "y": 2}}


def test_lists_are_replaced_not_concatenated():
    assert merge({"days": ["Mo", "Tu"]}, {"days": ["Lu"]}) == {"days": ["Lu"]}


def test_scalar_can_replace_mapping_and_back():
    assert merge({"a": {"x": 1}}, {"a": 3}) == {"a": 3}
    assert merge({"a": 3}, {"a": {"x": 1}}) == {"a": {"x": 1}}


def test_merge_leaves_inputs_untouched_and_shares_nothing():
    base = {"b": {"x": [1]}}
    override = {"b": {"y": [2]}}

    result = merge(base, override)
    result["b"]["x"].append(99)
    result["b"]["y"].append(99)

    assert base == {"b": {"x": [1]}}
    assert override == {"b": {"y": [2]}}


def test_select_fragments_takes_first_root_per_sublocale():
    # 1. Setup: two sublocales (root, en), two roots (app first, package second)
    layers = [
        [None, {"src": "pkg-root"}],
        [{"src": "app-en"}, {"src": "pkg-en"}],
    ]

    # 2. Execute
    selected = select_fragments(layers)

    # 3. Assert
    assert selected == [{"src": "pkg-root"}, {"src": "app-en"}]


def test_select_fragments_cross_roots_orders_lower_priority_first():
    layers = [[{"a": 1}, {"a": 2, "b": 2}]]

    assert select_fragments(layers, cross_roots=True) == [{"a": 2, "b": 2}, {"a": 1}]
    assert merge_fragments(layers, MergeOptions(cross_roots=True)) == {"a": 1, "b": 2}
    assert merge_fragments(layers) == {"a": 1}


def test_merge_fragments_options():
    layers = [[{"a": 1, "r": True}], [None], [{"a": 3}]]

    assert merge_fragments(layers) == {"a": 3, "r": True}
    assert merge_fragments(layers, MergeOptions(most_specific=True)) == {"a": 3}
    assert merge_fragments(layers, MergeOptions(return_one=True)) == {"a": 1, "r": True}


def test_merge_fragments_with_nothing_found_is_empty():
    assert merge_fragments([]) == {}
    assert merge_fragments([[None, None], [None, None]]) == {}
