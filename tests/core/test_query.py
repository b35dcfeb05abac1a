"""Tests for GraphQuery."""

from bpmninject.document import BpmnDocument
from bpmninject.graph import FlowNode, GraphQuery, GraphRewriter, NodeRole, SequenceFlow

from tests.core.bpmn_test_helpers import make_bpmn


def build_query(xml: str) -> GraphQuery:
    return GraphQuery(BpmnDocument.from_string(xml))


class TestNodeRole:
    """Tests for NodeRole tag mapping."""

    def test_known_roles(self):
        assert NodeRole.from_tag("{urn:x}startEvent") is NodeRole.START_EVENT
        assert NodeRole.from_tag("endEvent") is NodeRole.END_EVENT
        assert NodeRole.from_tag("serviceTask") is NodeRole.SERVICE_TASK

    def test_unknown_tag_is_other(self):
        assert NodeRole.from_tag("userTask") is NodeRole.OTHER


class TestFindByRole:
    """Tests for GraphQuery.find_by_role()."""

    def test_document_order(self):
        xml = make_bpmn(
            [("startEvent", "S2"), ("task", "T"), ("startEvent", "S1")],
            [],
        )

        starts = build_query(xml).find_by_role(NodeRole.START_EVENT)

        assert [node.id for node in starts] == ["S2", "S1"]

    def test_empty_when_absent(self):
        xml = make_bpmn([("task", "T")], [])

        assert build_query(xml).find_by_role(NodeRole.END_EVENT) == []

    def test_other_role(self, simple_xml):
        others = build_query(simple_xml).find_by_role(NodeRole.OTHER)

        assert [node.id for node in others] == ["Task_A"]

    def test_sequence_flows_are_not_nodes(self, simple_xml):
        ids = {node.id for node in build_query(simple_xml).iter_nodes()}

        assert ids == {"StartEvent_1", "Task_A", "EndEvent_1"}

    def test_only_direct_children_of_process(self):
        xml = (
            '<definitions xmlns="http://www.omg.org/spec/BPMN/20100524/MODEL">'
            '<process id="P"><startEvent id="S" />'
            '<subProcess id="Sub"><startEvent id="Inner" /></subProcess>'
            "</process></definitions>"
        )

        starts = build_query(xml).find_by_role(NodeRole.START_EVENT)

        assert [node.id for node in starts] == ["S"]


class TestFindFlows:
    """Tests for find_outgoing() / find_incoming()."""

    def test_outgoing(self):
        xml = make_bpmn(
            [("startEvent", "S"), ("task", "A"), ("task", "B")],
            [("F1", "S", "A"), ("F2", "A", "B"), ("F3", "S", "B")],
        )

        outgoing = build_query(xml).find_outgoing("S")

        assert [flow.id for flow in outgoing] == ["F1", "F3"]

    def test_incoming(self):
        xml = make_bpmn(
            [("task", "A"), ("task", "B"), ("endEvent", "E")],
            [("F1", "A", "E"), ("F2", "A", "B"), ("F3", "B", "E")],
        )

        incoming = build_query(xml).find_incoming("E")

        assert [flow.id for flow in incoming] == ["F1", "F3"]

    def test_no_matches(self, simple_xml):
        assert build_query(simple_xml).find_outgoing("EndEvent_1") == []

    def test_result_is_a_snapshot(self, simple_xml):
        doc = BpmnDocument.from_string(simple_xml)
        rewriter = GraphRewriter(doc)
        outgoing = rewriter.query.find_outgoing("StartEvent_1")

        rewriter.add_flow("StartEvent_1", "EndEvent_1")
        rewriter.remove_flow(outgoing[0])

        assert [flow.id for flow in outgoing] == ["Flow_A"]
        assert [flow.id for flow in rewriter.query.find_outgoing("StartEvent_1")] == ["Flow_1000"]


class TestLookups:
    """Tests for id lookups."""

    def test_find_by_id(self, simple_xml):
        node = build_query(simple_xml).find_by_id("Task_A")

        assert node is not None
        assert node.name == "Task A"
        assert node.role is NodeRole.OTHER

    def test_find_by_id_missing(self, simple_xml):
        query = build_query(simple_xml)

        assert query.find_by_id("Nope") is None
        assert not query.has_node("Nope")

    def test_find_flow(self, simple_xml):
        flow = build_query(simple_xml).find_flow("Flow_B")

        assert flow is not None
        assert (flow.source_ref, flow.target_ref) == ("Task_A", "EndEvent_1")


class TestIdentity:
    """Nodes and flows compare by identifier only."""

    def test_node_equality_by_id(self, simple_xml):
        query = build_query(simple_xml)
        first = query.find_by_id("Task_A")
        second = query.find_by_id("Task_A")
        second.set_attribute("name", "Renamed")

        assert isinstance(first, FlowNode)
        assert first == second
        assert hash(first) == hash(second)
        assert first != query.find_by_id("EndEvent_1")

    def test_flow_equality_by_id(self, simple_xml):
        query = build_query(simple_xml)
        flow = query.find_flow("Flow_A")

        assert isinstance(flow, SequenceFlow)
        assert flow == query.find_outgoing("StartEvent_1")[0]
        assert len({flow, query.find_flow("Flow_A")}) == 1

    def test_node_attributes_use_prefixes(self, simple_xml):
        doc = BpmnDocument.from_string(simple_xml)
        node = GraphQuery(doc).find_by_id("Task_A")

        node.set_attribute("camunda:topic", "billing")

        assert node.topic == "billing"
        assert node.attributes == {"camunda:topic": "billing"}
