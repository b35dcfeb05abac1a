"""Shared pytest fixtures."""

import pytest

SIMPLE_PROCESS = """<?xml version="1.0" encoding="UTF-8"?>
<bpmn:definitions xmlns:bpmn="http://www.omg.org/spec/BPMN/20100524/MODEL" xmlns:bpmndi="http://www.omg.org/spec/BPMN/20100524/DI" xmlns:camunda="http://camunda.org/schema/1.0/bpmn" id="Definitions_1" targetNamespace="http://bpmn.io/schema/bpmn">
  <bpmn:process id="Process_1" isExecutable="true">
    <bpmn:startEvent id="StartEvent_1" name="Start" />
    <bpmn:task id="Task_A" name="Task A" />
    <bpmn:endEvent id="EndEvent_1" name="End" />
    <bpmn:sequenceFlow id="Flow_A" sourceRef="StartEvent_1" targetRef="Task_A" />
    <bpmn:sequenceFlow id="Flow_B" sourceRef="Task_A" targetRef="EndEvent_1" />
  </bpmn:process>
  <bpmndi:BPMNDiagram id="BPMNDiagram_1">
    <bpmndi:BPMNPlane id="BPMNPlane_1" bpmnElement="Process_1" />
  </bpmndi:BPMNDiagram>
</bpmn:definitions>
"""


@pytest.fixture
def simple_xml():
    """Start -> Task_A -> End, with the camunda namespace declared."""
    return SIMPLE_PROCESS


@pytest.fixture
def injector(simple_xml):
    """Injector over the simple process."""
    from bpmninject import ServiceTaskInjector

    return ServiceTaskInjector(simple_xml)


@pytest.fixture
def bpmn_file(tmp_path, simple_xml):
    """The simple process written to disk."""
    path = tmp_path / "process.bpmn"
    path.write_text(simple_xml, encoding="utf-8")
    return path
