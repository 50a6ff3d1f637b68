"""Tests for the tree extractor."""

import pytest

from designlens.engine.extractor import component_complexity, extract_components, extract_selection
from designlens.errors import ExtractionError, NoSelectionError
from designlens.host.document import SceneGraph
from tests.conftest import deep_chain_snapshot


def test_empty_selection_raises(landing_graph):
    with pytest.raises(NoSelectionError):
        extract_selection(landing_graph, [])


def test_unknown_node_raises(landing_graph):
    with pytest.raises(ExtractionError) as exc:
        extract_selection(landing_graph, ["404:1"])
    assert exc.value.node_id == "404:1"


def test_root_record(landing_graph):
    result = extract_selection(landing_graph, ["1:1"])
    assert len(result.roots) == 1
    root = result.roots[0]
    assert root.id == "1:1"
    assert root.kind == "FRAME"
    assert root.depth == 0
    assert root.dimensions.width == 1440
    assert root.auto_layout is not None
    assert root.auto_layout.mode == "VERTICAL"
    assert root.auto_layout.spacing == 24
    assert root.auto_layout.padding.top == 32
    assert root.fills[0].type == "SOLID"
    assert root.fills[0].color.b == 0.9
    assert [c.id for c in root.children] == ["1:2", "1:3", "1:5"]


def test_pages_group_roots(landing_graph):
    result = extract_selection(landing_graph, ["1:1", "1:8"])
    assert len(result.pages) == 1
    page = result.pages[0]
    assert page.id == "1:0"
    assert page.name == "Home"
    assert [c.id for c in page.children] == ["1:1", "1:8"]


def test_selecting_a_page_selects_its_children(landing_graph):
    result = extract_selection(landing_graph, ["1:0"])
    assert [r.id for r in result.roots] == ["1:1", "1:8"]


def test_nested_selection_not_visited_twice(landing_graph):
    result = extract_selection(landing_graph, ["1:1", "1:3", "1:1"])
    ids = [r.id for root in result.roots for r in root.walk()]
    assert len(ids) == len(set(ids))
    assert [r.id for r in result.roots] == ["1:1"]


def test_subtrees_are_disjoint(landing_graph):
    root = extract_selection(landing_graph, ["1:1"]).roots[0]
    for record in root.walk():
        assert sum(c.subtree_size for c in record.children) == record.subtree_size - 1
    ids = [r.id for r in root.walk()]
    assert len(ids) == len(set(ids)) == 7


def test_constraints_default_when_absent(landing_graph):
    root = extract_selection(landing_graph, ["1:1"]).roots[0]
    nav = root.children[2]
    assert nav.constraints.horizontal == "LEFT"
    assert nav.constraints.vertical == "TOP"
    assert not nav.has_constraints
    assert root.children[0].has_constraints


def test_inactive_layout_and_missing_fills_omitted(landing_graph):
    backdrop = extract_selection(landing_graph, ["1:8"]).roots[0]
    assert backdrop.auto_layout is None
    assert backdrop.fills is None
    assert backdrop.text is None


def test_text_metadata_defaults(landing_graph):
    root = extract_selection(landing_graph, ["1:1"]).roots[0]
    headline = root.children[0]
    assert headline.text.characters == "Welcome"
    assert headline.text.font_size == 48
    assert headline.text.font_name.family == "Inter"
    assert headline.text.font_weight == 400
    assert headline.text.line_height == 1.2
    label = root.children[1].children[0]
    assert label.text.font_size == 16
    assert root.children[1].text is None


def test_instances(landing_graph):
    instances = extract_selection(landing_graph, ["1:1"]).instances
    assert [i.id for i in instances] == ["1:3", "1:7"]
    button, icon = instances
    assert button.component_id == "2:1"
    assert not button.is_nested
    assert button.depth == 1
    assert icon.component_id == "2:5"
    assert icon.is_nested
    assert icon.depth == 2


def test_interactive_elements(landing_graph):
    interactions = extract_selection(landing_graph, ["1:1"]).interactions
    assert [(e.id, e.type) for e in interactions] == [
        ("1:3", "BUTTON"),
        ("1:5", "NAVIGATION"),
        ("1:6", "LINK"),
    ]
    button = interactions[0]
    assert button.accessibility.has_alt_text
    assert button.accessibility.aria_label == "Sign up for an account"
    assert button.states == ["Default"]
    assert interactions[1].accessibility.aria_label is None


def test_components_are_document_wide(landing_graph):
    # Selection does not touch the components page
    components = extract_selection(landing_graph, ["1:8"]).components
    assert [c.id for c in components] == ["2:1", "2:3", "2:4", "2:5"]


def test_component_records(landing_graph):
    by_id = {c.id: c for c in extract_components(landing_graph)}

    button = by_id["2:1"]
    assert button.instance_count == 1
    assert button.description == "Primary action"
    assert button.complexity.structure == 1
    assert button.complexity.interactions == 3
    assert button.complexity.variants == 0
    assert button.complexity.overall == 1

    input_set = by_id["2:3"]
    assert input_set.kind == "COMPONENT_SET"
    assert input_set.complexity.variants == 2
    assert input_set.variants[0].properties == {"State": "Default", "Size": "Md"}

    assert by_id["2:5"].instance_count == 1


def test_component_set_counts_variant_instances():
    doc = {
        "id": "0:0",
        "type": "DOCUMENT",
        "children": [
            {
                "id": "1:0",
                "type": "PAGE",
                "children": [
                    {"id": "s", "type": "COMPONENT_SET", "children": [{"id": "v1", "type": "COMPONENT"}]},
                    {"id": "i1", "type": "INSTANCE", "componentId": "v1"},
                    {"id": "i2", "type": "INSTANCE", "mainComponent": {"id": "v1"}},
                ],
            },
        ],
    }
    by_id = {c.id: c for c in extract_components(SceneGraph(doc))}
    assert by_id["s"].instance_count == 2
    assert by_id["v1"].instance_count == 2


@pytest.mark.parametrize("descendants", [1, 4, 5, 24, 49, 50, 500])
@pytest.mark.parametrize("interactive", [False, True])
@pytest.mark.parametrize("axes", [0, 1, 2, 3, 7])
def test_component_overall_bounded(descendants, interactive, axes):
    score = component_complexity(descendants, interactive, axes)
    assert 1 <= score.overall <= 10
    assert 1 <= score.structure <= 10
    assert score.variants == min(3, axes)


def test_component_complexity_formula():
    score = component_complexity(50, True, 3)
    assert score.structure == 10
    assert score.interactions == 3
    assert score.variants == 3
    assert score.overall == 5


def test_accessor_failure_names_node(landing_snapshot):
    nav = landing_snapshot["document"]["children"][0]["children"][0]["children"][2]
    nav["children"][0]["width"] = "wide"
    graph = SceneGraph.from_snapshot(landing_snapshot)
    with pytest.raises(ExtractionError) as exc:
        extract_selection(graph, ["1:1"])
    assert exc.value.node_id == "1:6"


def test_document_root_cannot_be_selected(landing_graph):
    with pytest.raises(ExtractionError):
        extract_selection(landing_graph, ["0:0"])


def test_deep_chain_extracts_without_recursion():
    graph = SceneGraph.from_snapshot(deep_chain_snapshot(3000))
    result = extract_selection(graph, ["n1"])
    root = result.roots[0]
    assert root.subtree_size == 3000
    records = list(root.walk())
    assert [r.id for r in records[:3]] == ["n1", "n2", "n3"]
    assert records[-1].id == "n3000"
    assert records[-1].depth == 2999
    assert records[-1].kind == "RECTANGLE"


def test_deep_chain_failure_names_node():
    snapshot = deep_chain_snapshot(3000)
    node = snapshot["document"]["children"][0]["children"][0]
    while node["id"] != "n2500":
        node = node["children"][0]
    node["height"] = "tall"
    with pytest.raises(ExtractionError) as exc:
        extract_selection(SceneGraph.from_snapshot(snapshot), ["n1"])
    assert exc.value.node_id == "n2500"
