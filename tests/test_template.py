"""Tests for aliasx.template: placeholder resolution."""

from __future__ import annotations

import pytest

from aliasx.errors import (
    NoMappingForSelection,
    UndefinedInput,
    UndefinedMapping,
    UndefinedMappingInput,
    UnresolvedInput,
    UnsupportedPlaceholderKind,
)
from aliasx.tasks.model import Input, InputMapping, TaskSet
from aliasx.template import missing_inputs, resolve_command


@pytest.fixture
def deploy_set() -> TaskSet:
    return TaskSet(
        inputs=[
            Input(id="env", options=["dev", "prod"]),
            Input(id="region", options=["us", "eu"], description="Region"),
        ],
        mappings=[
            InputMapping(id="target", input="env", options={"dev": "dev.example.com"}),
            InputMapping(id="zone", input="region", options={"us": "us-east-1", "eu": "eu-west-1"}),
        ],
    )


class TestResolveCommand:
    def test_input_scenario(self, deploy_set):
        assert resolve_command("ship ${input:env}", deploy_set, {"env": "prod"}) == "ship prod"

    def test_plain_command_unchanged(self, deploy_set):
        assert resolve_command("echo hi", deploy_set, {}) == "echo hi"

    def test_repeated_input_replaced_everywhere(self, deploy_set):
        out = resolve_command("${input:env}-${input:env}", deploy_set, {"env": "dev"})
        assert out == "dev-dev"

    def test_value_containing_placeholder_not_substituted_twice(self, deploy_set):
        out = resolve_command(
            "a=${input:env} b=${input:region}",
            deploy_set,
            {"env": "${input:region}", "region": "eu"},
        )
        assert out == "a=${input:region} b=eu"

    def test_mapping_resolves_from_selected_input(self, deploy_set):
        out = resolve_command("curl ${mapping:target}", deploy_set, {"env": "dev"})
        assert out == "curl dev.example.com"

    def test_mapping_without_entry_for_selection(self, deploy_set):
        with pytest.raises(NoMappingForSelection) as excinfo:
            resolve_command("curl ${mapping:target}", deploy_set, {"env": "prod"})
        assert excinfo.value.mapping_id == "target"
        assert excinfo.value.value == "prod"

    def test_input_and_mapping_together(self, deploy_set):
        out = resolve_command(
            "deploy ${input:env} ${mapping:zone} ${mapping:zone}",
            deploy_set,
            {"env": "dev", "region": "eu"},
        )
        assert out == "deploy dev eu-west-1 eu-west-1"

    def test_unresolved_input_aborts(self, deploy_set):
        with pytest.raises(UnresolvedInput) as excinfo:
            resolve_command("${input:missing}", deploy_set, {})
        assert excinfo.value.input_id == "missing"

    def test_mapping_input_without_selection(self, deploy_set):
        with pytest.raises(UnresolvedInput) as excinfo:
            resolve_command("${mapping:zone}", deploy_set, {})
        assert excinfo.value.input_id == "region"

    def test_undefined_mapping(self, deploy_set):
        with pytest.raises(UndefinedMapping):
            resolve_command("${mapping:nope}", deploy_set, {})

    def test_unsupported_kind_rejected(self, deploy_set):
        with pytest.raises(UnsupportedPlaceholderKind) as excinfo:
            resolve_command("echo ${env:HOME}", deploy_set, {})
        assert excinfo.value.kind == "env"

    def test_matching_is_case_sensitive(self, deploy_set):
        with pytest.raises(UnresolvedInput):
            resolve_command("${input:ENV}", deploy_set, {"env": "dev"})

    def test_selections_not_mutated(self, deploy_set):
        selections = {"env": "dev"}
        resolve_command("${input:env} ${mapping:target}", deploy_set, selections)
        assert selections == {"env": "dev"}


class TestMissingInputs:
    def test_direct_and_mapped_inputs_in_order(self, deploy_set):
        missing = missing_inputs("${mapping:zone} ${input:env}", deploy_set, {})
        assert [i.id for i in missing] == ["env", "region"]

    def test_preselected_inputs_skipped(self, deploy_set):
        missing = missing_inputs("${input:env} ${mapping:zone}", deploy_set, {"env": "dev"})
        assert [i.id for i in missing] == ["region"]

    def test_each_input_listed_once(self, deploy_set):
        missing = missing_inputs("${input:env} ${mapping:target} ${input:env}", deploy_set, {})
        assert [i.id for i in missing] == ["env"]

    def test_undeclared_input(self, deploy_set):
        with pytest.raises(UndefinedInput):
            missing_inputs("${input:missing}", deploy_set, {})

    def test_undeclared_input_with_preselection_is_accepted(self, deploy_set):
        assert missing_inputs("${input:missing}", deploy_set, {"missing": "x"}) == []

    def test_undeclared_mapping(self, deploy_set):
        with pytest.raises(UndefinedMapping):
            missing_inputs("${mapping:nope}", deploy_set, {})

    def test_mapping_referencing_undeclared_input(self):
        task_set = TaskSet(mappings=[InputMapping(id="m", input="ghost", options={})])
        with pytest.raises(UndefinedMappingInput):
            missing_inputs("${mapping:m}", task_set, {})

    def test_unsupported_kind(self, deploy_set):
        with pytest.raises(UnsupportedPlaceholderKind):
            missing_inputs("${secret:token}", deploy_set, {})
