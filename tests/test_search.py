from slaangle.search import dropdown_items, filtered_list, partition_by_favorite


def test_blank_query_returns_everything_in_order(printers):
    assert filtered_list(printers, "") == printers
    assert filtered_list(printers, "   ") == printers


def test_query_is_case_insensitive(printers):
    assert [p.id for p in filtered_list(printers, "ELEGOO")] == ["mars-3", "saturn-3-ultra"]


def test_query_matches_across_manufacturer_and_model(printers):
    assert [p.id for p in filtered_list(printers, "elegoo mars")] == ["mars-3"]
    assert filtered_list(printers, "nothing like this") == []


def test_partition_preserves_order(printers):
    starred, others = partition_by_favorite(printers, ["photon-m5s", "mars-3"])
    assert [p.id for p in starred] == ["mars-3", "photon-m5s"]
    assert [p.id for p in others] == ["saturn-3-ultra", "sonic-mini-8k"]


def test_dropdown_lists_favorites_first(printers):
    items = dropdown_items(printers, "", {"sonic-mini-8k"})
    assert [p.id for p in items] == ["sonic-mini-8k", "mars-3", "saturn-3-ultra", "photon-m5s"]
    items = dropdown_items(printers, "elegoo", {"sonic-mini-8k", "saturn-3-ultra"})
    assert [p.id for p in items] == ["saturn-3-ultra", "mars-3"]
