"""Tests for the anchored rewrites: after start events, before end events."""

from bpmninject import ServiceTaskInjector
from bpmninject.graph import NodeRole

from tests.core.bpmn_test_helpers import edge_set, flow_ids, flows_by_id, make_bpmn, node_ids


class TestInjectAfterEachStart:
    """Tests for inject_after_each_start()."""

    def test_start_without_outgoing_flows(self):
        injector = ServiceTaskInjector(make_bpmn([("startEvent", "S"), ("task", "A")], [("F1", "A", "A")]))

        created = injector.inject_after_each_start("Init")

        assert created == ["ServiceTask_1000"]
        assert node_ids(injector) == {"S", "A", "ServiceTask_1000"}
        assert edge_set(injector) == {("S", "ServiceTask_1000"), ("A", "A")}
        assert flows_by_id(injector)["F1"] == ("A", "A")

    def test_successors_move_behind_new_task(self):
        xml = make_bpmn(
            [("startEvent", "S"), ("task", "X1"), ("task", "X2"), ("task", "X3")],
            [("F1", "S", "X1"), ("F2", "S", "X2"), ("F3", "S", "X3"), ("F4", "X1", "X2")],
        )
        injector = ServiceTaskInjector(xml)
        before = flow_ids(injector)

        [task] = injector.inject_after_each_start("Init")

        assert edge_set(injector) == {
            ("S", task),
            (task, "X1"),
            (task, "X2"),
            (task, "X3"),
            ("X1", "X2"),
        }
        after = flow_ids(injector)
        assert {"F1", "F2", "F3"}.isdisjoint(after)
        new_ids = after - before
        assert len(new_ids) == 4
        assert new_ids.isdisjoint(before)

    def test_new_task_attributes(self, injector):
        [task_id] = injector.inject_after_each_start("Init")

        task = injector.query.find_by_id(task_id)
        assert task.role is NodeRole.SERVICE_TASK
        assert task.name == "Init"
        assert task.execution_type == "external"
        assert task.topic == "service-task-topic"

    def test_default_name(self, injector):
        [task_id] = injector.inject_after_each_start()

        assert injector.query.find_by_id(task_id).name == "Pre-Process Service Task"

    def test_each_start_event_gets_its_own_task(self):
        xml = make_bpmn(
            [("startEvent", "S1"), ("startEvent", "S2"), ("task", "A")],
            [("F1", "S1", "A"), ("F2", "S2", "A")],
        )
        injector = ServiceTaskInjector(xml)

        created = injector.inject_after_each_start("Init")

        assert created == ["ServiceTask_1000", "ServiceTask_1001"]
        assert edge_set(injector) == {
            ("S1", "ServiceTask_1000"),
            ("ServiceTask_1000", "A"),
            ("S2", "ServiceTask_1001"),
            ("ServiceTask_1001", "A"),
        }

    def test_not_idempotent(self, injector):
        first = injector.inject_after_each_start("First")
        second = injector.inject_after_each_start("Second")

        assert edge_set(injector) == {
            ("StartEvent_1", second[0]),
            (second[0], first[0]),
            (first[0], "Task_A"),
            ("Task_A", "EndEvent_1"),
        }

    def test_no_start_events_is_a_no_op(self):
        injector = ServiceTaskInjector(make_bpmn([("task", "A")], []))

        assert injector.inject_after_each_start("Init") == []
        assert node_ids(injector) == {"A"}


class TestInjectBeforeEachEnd:
    """Tests for inject_before_each_end()."""

    def test_predecessors_are_retargeted_in_place(self):
        xml = make_bpmn(
            [("task", "Y1"), ("task", "Y2"), ("endEvent", "E")],
            [("F1", "Y1", "E"), ("F2", "Y2", "E"), ("F3", "Y1", "Y2")],
        )
        injector = ServiceTaskInjector(xml)

        [task] = injector.inject_before_each_end("Cleanup")

        flows = flows_by_id(injector)
        assert flows["F1"] == ("Y1", task)
        assert flows["F2"] == ("Y2", task)
        assert flows["F3"] == ("Y1", "Y2")
        into_end = [fid for fid, (_, target) in flows.items() if target == "E"]
        assert len(into_end) == 1
        assert flows[into_end[0]] == (task, "E")

    def test_end_without_incoming_flows(self):
        injector = ServiceTaskInjector(make_bpmn([("endEvent", "E")], []))

        [task] = injector.inject_before_each_end("Cleanup")

        assert edge_set(injector) == {(task, "E")}

    def test_default_name(self, injector):
        [task_id] = injector.inject_before_each_end()

        assert injector.query.find_by_id(task_id).name == "Post-Process Service Task"

    def test_each_end_event_gets_its_own_task(self):
        xml = make_bpmn(
            [("task", "A"), ("endEvent", "E1"), ("endEvent", "E2")],
            [("F1", "A", "E1"), ("F2", "A", "E2")],
        )
        injector = ServiceTaskInjector(xml)

        created = injector.inject_before_each_end("Cleanup")

        assert created == ["ServiceTask_1000", "ServiceTask_1001"]
        assert flows_by_id(injector)["F1"] == ("A", "ServiceTask_1000")
        assert flows_by_id(injector)["F2"] == ("A", "ServiceTask_1001")


class TestCombinedScenario:
    """Start -> Task_A -> End with both anchored rewrites."""

    def test_init_then_cleanup(self, injector):
        injector.inject_after_each_start("Init")
        injector.inject_before_each_end("Cleanup")

        assert node_ids(injector) == {
            "StartEvent_1",
            "Task_A",
            "EndEvent_1",
            "ServiceTask_1000",
            "ServiceTask_1001",
        }
        assert injector.query.find_by_id("ServiceTask_1000").name == "Init"
        assert injector.query.find_by_id("ServiceTask_1001").name == "Cleanup"
        assert edge_set(injector) == {
            ("StartEvent_1", "ServiceTask_1000"),
            ("ServiceTask_1000", "Task_A"),
            ("Task_A", "ServiceTask_1001"),
            ("ServiceTask_1001", "EndEvent_1"),
        }

    def test_flow_identity_asymmetry(self, injector):
        injector.inject_after_each_start("Init")
        injector.inject_before_each_end("Cleanup")

        ids = flow_ids(injector)
        # Start side re-creates its flow, end side keeps its flow.
        assert "Flow_A" not in ids
        assert "Flow_B" in ids
        assert flows_by_id(injector)["Flow_B"] == ("Task_A", "ServiceTask_1001")

    def test_unrelated_nodes_untouched(self, injector):
        task_before = dict(injector.query.find_by_id("Task_A").element.attrib)

        injector.inject_after_each_start("Init")
        injector.inject_before_each_end("Cleanup")

        assert dict(injector.query.find_by_id("Task_A").element.attrib) == task_before

    def test_serialized_output_contains_new_tasks(self, injector):
        injector.inject_after_each_start("Init")

        output = injector.serialize()

        assert '<bpmn:serviceTask id="ServiceTask_1000" name="Init"' in output
        assert 'camunda:type="external"' in output
        assert 'camunda:topic="service-task-topic"' in output
