"""Tests for Low-Mid Beam Control command batches."""

import pytest

from galaxy_devices.beam_control import (
    BeamControlRequest,
    build_beam_control_commands,
    clamp,
    product_type_code,
    supports_lmbc,
)


class TestClamp:

    @pytest.mark.parametrize("value,expected", [
        (150, 99),
        (5, 10),
        (45, 45),
        (0, 15),
        ("", 15),
        ("abc", 15),
        (None, 15),
        ("22.5", 22.5),
    ])
    def test_beam_angle(self, value, expected):
        assert clamp(value, (10, 99), 15) == expected


class TestProductType:

    @pytest.mark.parametrize("speaker,code", [
        ("LEO-M", "0"),
        ("lyon", "1"),
        ("LEOPARD", "2"),
        ("LINA", "5"),
        ("PANTHER", "9"),
        ("UNKNOWN", "0"),
        ("", "0"),
    ])
    def test_codes(self, speaker, code):
        assert product_type_code(speaker) == code

    def test_m1d_unsupported(self):
        assert not supports_lmbc("M1D")
        assert supports_lmbc("LYON")


class TestBuildCommands:

    def test_canonical_order(self):
        request = BeamControlRequest.create(array_index=2, beam_angle=20, control_type="1",
                                            elements_per_output=2, total_elements=16,
                                            product_type="1", starting_output=5,
                                            starting_element=3)
        assert build_beam_control_commands(request) == [
            "/processing/beam_control_array/2/beam_angle='20'",
            "/processing/beam_control_array/2/bypass='false'",
            "/processing/beam_control_array/2/control_type='1'",
            "/processing/beam_control_array/2/elements_per_output='2'",
            "/processing/beam_control_array/2/number_of_elements='16'",
            "/processing/beam_control_array/2/product_type='1'",
            "/processing/beam_control_array/2/starting_output_number='5'",
            "/processing/beam_control_array/2/starting_element='3'",
        ]

    def test_clamped_values(self):
        request = BeamControlRequest.create(beam_angle=150, starting_element=0, array_index=9)
        assert request.beam_angle == 99
        assert request.starting_element == 1
        assert request.array_index == 4

    def test_unknown_control_type_is_spread(self):
        request = BeamControlRequest.create(control_type="7")
        assert request.control_type == "0"
        assert request.control_type_label == "Spread"


class TestFromOptions:

    def test_standalone_bypass(self):
        request = BeamControlRequest.from_options({"bypass": "true", "product_type": "LYON"}, 16)
        assert request.bypass is True
        assert request.product_type == "1"
        assert "/processing/beam_control_array/1/bypass='true'" in build_beam_control_commands(request)

    def test_element_count_and_output_clamped(self):
        request = BeamControlRequest.from_options(
            {"number_of_elements": 4, "starting_output": 40, "product_type": "3"}, 16)
        assert request.total_elements == 8
        assert request.starting_output == 16
        assert request.product_label == "MICA"

    def test_defaults(self):
        request = BeamControlRequest.from_options({}, 16)
        assert (request.array_index, request.beam_angle, request.total_elements) == (1, 15, 12)
        assert request.bypass is False
