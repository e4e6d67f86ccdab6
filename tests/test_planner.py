"""Tests for output allocation and speaker settings."""

import pytest

from galaxy_devices.base import ArrayValidationError, CapacityExceededError
from galaxy_devices.planner import (
    ROLE_PRIMARY,
    ROLE_SECONDARY,
    ArrayRequest,
    build_plan,
    resolve_settings,
)


class TestBuildPlan:

    @pytest.mark.parametrize("elements", [1, 2, 7, 12, 16])
    @pytest.mark.parametrize("per_output", [1, 2])
    def test_primary_elements_fully_covered(self, catalog, elements, per_output):
        request = ArrayRequest(primary_speaker="LEO", primary_elements=elements,
                               elements_per_output=per_output)
        plan = build_plan(request, catalog, 16)

        assert len(plan) == -(-elements // per_output)
        assert sum(a.element_count for a in plan) == elements
        # Contiguous, no gaps or overlaps
        expected = 1
        for a in plan:
            assert a.first_element == expected
            expected = a.last_element + 1
        assert expected == elements + 1

    def test_outputs_start_at_start_output(self, catalog):
        plan = build_plan(ArrayRequest(primary_speaker="LEO", primary_elements=4, start_output=5),
                          catalog, 16)
        assert [a.output_number for a in plan] == [5, 6, 7, 8]

    def test_capacity_exceeded(self, catalog):
        request = ArrayRequest(primary_speaker="LEO", primary_elements=12, start_output=10)
        with pytest.raises(CapacityExceededError) as exc:
            build_plan(request, catalog, 16)
        assert exc.value.required == 12
        assert exc.value.available == 7
        assert "Need 12 outputs starting from 10" in str(exc.value)

    def test_start_past_capacity_has_no_available_outputs(self, catalog):
        with pytest.raises(CapacityExceededError) as exc:
            build_plan(ArrayRequest(primary_speaker="LEO", primary_elements=1, start_output=20),
                       catalog, 16)
        assert exc.value.available == 0

    def test_exact_fit(self, catalog):
        plan = build_plan(ArrayRequest(primary_speaker="LEO", primary_elements=16), catalog, 16)
        assert plan[-1].output_number == 16

    def test_missing_primary_rejected(self, catalog):
        with pytest.raises(ArrayValidationError, match="No primary speaker"):
            build_plan(ArrayRequest(primary_speaker=""), catalog, 16)

    @pytest.mark.parametrize("field,value", [
        ("primary_elements", 0),
        ("elements_per_output", 3),
        ("start_output", 0),
        ("link_group", 9),
    ])
    def test_out_of_range_rejected(self, catalog, field, value):
        request = ArrayRequest(primary_speaker="LEO", **{field: value})
        with pytest.raises(ArrayValidationError):
            build_plan(request, catalog, 16)

    def test_mixed_array_layout(self, catalog):
        request = ArrayRequest(primary_speaker="LINA", primary_elements=8, mixed_array=True,
                               secondary_speaker="LEO", secondary_elements=4)
        plan = build_plan(request, catalog, 16)

        assert len(plan) == 12
        assert all(a.role == ROLE_PRIMARY and a.speaker == "LINA" for a in plan[:8])
        assert all(a.role == ROLE_SECONDARY and a.speaker == "LEO" for a in plan[8:])
        assert [a.output_number for a in plan[8:]] == [9, 10, 11, 12]
        assert [a.first_element for a in plan[8:]] == [1, 2, 3, 4]

    def test_mixed_array_two_per_output(self, catalog):
        request = ArrayRequest(primary_speaker="LINA", primary_elements=5, elements_per_output=2,
                               mixed_array=True, secondary_speaker="LEO", secondary_elements=3)
        plan = build_plan(request, catalog, 16)
        # ceil(8 / 2) outputs: 3 primary, then the secondary restarts at element 1
        assert [a.role for a in plan] == [ROLE_PRIMARY] * 3 + [ROLE_SECONDARY]
        assert (plan[2].first_element, plan[2].last_element) == (5, 5)
        assert (plan[3].first_element, plan[3].last_element) == (1, 2)

    def test_mixed_array_fits_last_outputs(self, catalog):
        request = ArrayRequest(primary_speaker="LINA", primary_elements=3, elements_per_output=2,
                               start_output=14, mixed_array=True, secondary_speaker="LEO",
                               secondary_elements=3)
        plan = build_plan(request, catalog, 16)
        assert request.num_outputs == 3
        assert [a.output_number for a in plan] == [14, 15, 16]
        assert [a.role for a in plan] == [ROLE_PRIMARY, ROLE_PRIMARY, ROLE_SECONDARY]

    def test_mixed_flag_without_secondary_is_single_array(self, catalog):
        request = ArrayRequest(primary_speaker="MICA", primary_elements=4, mixed_array=True)
        plan = build_plan(request, catalog, 16)
        assert len(plan) == 4
        assert all(a.role == ROLE_PRIMARY for a in plan)

    def test_planning_is_repeatable(self, catalog):
        request = ArrayRequest(primary_speaker="LINA", primary_elements=8, mixed_array=True,
                               secondary_speaker="LEO", secondary_elements=4,
                               primary_starting_point="0")
        assert build_plan(request, catalog, 16) == build_plan(request, catalog, 16)


class TestResolveSettings:

    def test_default_phase_when_blank(self, catalog):
        settings = resolve_settings("LINA", "", "", catalog)
        assert settings.phase_id == "pc63"
        assert settings.type_id == "80"

    def test_explicit_phase(self, catalog):
        assert resolve_settings("LINA", "pc125", "", catalog).type_id == "79"

    def test_unknown_phase_falls_back_to_first(self, catalog):
        settings = resolve_settings("LYON", "pc999", "", catalog)
        assert (settings.phase_id, settings.type_id) == ("pc63", "6")

    def test_unknown_speaker_has_no_type(self, catalog):
        settings = resolve_settings("NOT_A_SPEAKER", "pc125", "0", catalog)
        assert settings.type_id is None
        assert settings.calibration_commands == ()

    def test_starting_point_selected(self, catalog):
        settings = resolve_settings("LINA", "", "2", catalog)
        assert settings.starting_point_title == "LINA Ground Stack"
        assert settings.calibration_commands == ("/processing/output/{CH}/polarity_reversal='true'",)

    def test_unknown_starting_point_is_not_an_error(self, catalog):
        settings = resolve_settings("LINA", "", "42", catalog)
        assert settings.calibration_commands == ()
        assert settings.starting_point_title == ""


class TestArrayRequestFromOptions:

    def test_defaults(self, catalog):
        request = ArrayRequest.from_options({"primary_speaker": "leo-m"}, catalog)
        assert request.primary_speaker == "LEO"
        assert request.primary_elements == 12
        assert request.elements_per_output == 1
        assert request.start_output == 1
        assert request.link_group_enable is True
        assert not request.is_mixed

    def test_zero_and_blank_use_defaults(self, catalog):
        request = ArrayRequest.from_options(
            {"primary_speaker": "LEO", "primary_elements": 0, "start_output": "", "secondary_elements": "x"},
            catalog)
        assert request.primary_elements == 12
        assert request.start_output == 1
        assert request.secondary_elements == 6

    def test_mixed_uses_compatible_secondary(self, catalog):
        request = ArrayRequest.from_options({"primary_speaker": "LINA", "mixed_array": True}, catalog)
        assert request.secondary_speaker == "LEO"
        assert request.is_mixed
        assert request.total_elements == 18
        assert request.num_outputs == 18

    def test_incompatible_secondary_replaced(self, catalog):
        request = ArrayRequest.from_options(
            {"primary_speaker": "LINA", "mixed_array": True, "secondary_speaker": "LYON"}, catalog)
        assert request.secondary_speaker == "LEO"

    def test_primary_itself_allowed_as_secondary(self, catalog):
        request = ArrayRequest.from_options(
            {"primary_speaker": "LINA", "mixed_array": True, "secondary_speaker": "lina"}, catalog)
        assert request.secondary_speaker == "LINA"
        assert request.is_mixed

    def test_no_mixed_array_without_compatible_model(self, catalog):
        request = ArrayRequest.from_options(
            {"primary_speaker": "MICA", "mixed_array": True, "secondary_speaker": "LEO",
             "secondary_elements": 4}, catalog)
        assert not request.is_mixed
        assert request.total_elements == 12

    def test_secondary_ignored_when_not_mixed(self, catalog):
        request = ArrayRequest.from_options(
            {"primary_speaker": "LINA", "secondary_speaker": "LEO"}, catalog)
        assert request.secondary_speaker == ""

    def test_string_flags(self, catalog):
        request = ArrayRequest.from_options(
            {"primary_speaker": "LEO", "link_group_enable": "false", "reset_to_factory": "true"}, catalog)
        assert request.link_group_enable is False
        assert request.reset_to_factory is True
