"""
Tool definitions for Galaxy array control
Matches the input_schema layout used by MCP clients and LLM tool APIs
"""

_ARRAY_PROPERTIES = {
    "primary_speaker": {
        "type": "string",
        "description": "Primary loudspeaker model key (e.g., 'LEO', 'LYON', 'LINA'). Use list_speakers to see valid keys."
    },
    "primary_elements": {
        "type": "integer",
        "description": "Number of primary cabinets in the array (default 12)"
    },
    "elements_per_output": {
        "type": "integer",
        "enum": [1, 2],
        "description": "Cabinets driven by each Galaxy output (default 1)"
    },
    "start_output": {
        "type": "integer",
        "description": "First Galaxy output number (1-based, default 1)"
    },
    "mixed_array": {
        "type": "boolean",
        "description": "Hang a compatible secondary model below the primary"
    },
    "secondary_speaker": {
        "type": "string",
        "description": "Secondary model key (optional; defaults to the model declared compatible with the primary)"
    },
    "secondary_elements": {
        "type": "integer",
        "description": "Number of secondary cabinets (default 6)"
    },
    "primary_phase": {
        "type": "string",
        "description": "Phase curve for the primary (e.g., 'pc125'); defaults to the model's first curve"
    },
    "secondary_phase": {
        "type": "string",
        "description": "Phase curve for the secondary"
    },
    "primary_starting_point": {
        "type": "string",
        "description": "Starting point preset id for the primary (see list_speakers)"
    },
    "secondary_starting_point": {
        "type": "string",
        "description": "Starting point preset id for the secondary"
    },
    "link_group": {
        "type": "integer",
        "minimum": 0,
        "maximum": 8,
        "description": "Output link group to assign (0 = none)"
    },
    "link_group_enable": {
        "type": "boolean",
        "description": "Enable the link group (false bypasses it). Default true."
    },
    "reset_to_factory": {
        "type": "boolean",
        "description": "Reset every output in the array to factory defaults first"
    },
    "enable_lmbc": {
        "type": "boolean",
        "description": "Also configure Low-Mid Beam Control for the array"
    },
    "lmbc_array_index": {
        "type": "integer",
        "minimum": 1,
        "maximum": 4,
        "description": "Beam control array index (1-4)"
    },
    "lmbc_beam_angle": {
        "type": "number",
        "description": "Beam angle in degrees (10-99, default 15)"
    },
    "lmbc_control_type": {
        "type": "string",
        "enum": ["0", "1"],
        "description": "'0' = Spread, '1' = Steer Up"
    },
    "lmbc_starting_element": {
        "type": "integer",
        "description": "First element under beam control (1-32)"
    },
}

TOOLS = [
    {
        "name": "list_speakers",
        "description": "List loudspeaker models known to the Galaxy integration table, with their phase curves, starting point presets and compatible secondary model. Use this before designing an array.",
        "input_schema": {
            "type": "object",
            "properties": {
                "category": {
                    "type": "string",
                    "enum": ["line-array", "subwoofer"],
                    "description": "Optional category filter"
                }
            }
        }
    },
    {
        "name": "line_array_design",
        "description": "Design a line array (optionally mixed with a secondary model) and send it to the Galaxy: integration types, starting point commands, delay compensation, link group and optional LMBC.",
        "input_schema": {
            "type": "object",
            "properties": {
                **_ARRAY_PROPERTIES,
                "preview": {
                    "type": "boolean",
                    "description": "Return the command batch without sending it"
                }
            },
            "required": ["primary_speaker"]
        }
    },
    {
        "name": "subwoofer_design",
        "description": "Design a subwoofer layout and send it to the Galaxy. Modes: 'endfire' (rows delayed by a quarter period of the target frequency), 'array' (straight row delayed into a virtual arc), 'array_endfire' (arc rows combined with end-fire row delays) and 'gradient' (front and reversed cabinets with separate starting points).",
        "input_schema": {
            "type": "object",
            "properties": {
                "mode": {
                    "type": "string",
                    "enum": ["endfire", "array", "array_endfire", "gradient"]
                },
                "speaker": {
                    "type": "string",
                    "description": "Subwoofer model key (e.g., '1100_LFC'). Optional except for gradient."
                },
                "starting_point": {
                    "type": "string",
                    "description": "Starting point preset id (front cabinets in gradient mode)"
                },
                "reversed_starting_point": {
                    "type": "string",
                    "description": "Starting point preset id for the reversed cabinets (gradient)"
                },
                "frequency": {
                    "type": "number",
                    "description": "End-fire target frequency in Hz (default 80)"
                },
                "temperature": {
                    "type": "number",
                    "description": "Air temperature (default 20)"
                },
                "temperature_unit": {"type": "string", "enum": ["C", "F"]},
                "depth": {
                    "type": "integer",
                    "minimum": 2,
                    "maximum": 8,
                    "description": "Number of end-fire taps or rows (defaults to the number given)"
                },
                "taps": {
                    "type": "array",
                    "items": {"type": "array", "items": {"type": "integer"}},
                    "description": "End-fire: outputs per tap, T0 first (e.g., [[1, 2], [3, 4]])"
                },
                "num_subs": {
                    "type": "integer",
                    "description": "Subs per arc row (default 6)"
                },
                "start_output": {
                    "type": "integer",
                    "description": "Array: first output of the arc row"
                },
                "row_starts": {
                    "type": "array",
                    "items": {"type": "integer"},
                    "description": "Array end-fire: first output of each row, front row first"
                },
                "spacing": {
                    "type": "number",
                    "description": "Distance between neighbouring subs in a row (default 1.0)"
                },
                "units": {"type": "string", "enum": ["m", "ft"]},
                "arc_angle": {
                    "type": "number",
                    "description": "Total arc angle in degrees (0-120, default 60; 0 = straight)"
                },
                "front_outputs": {
                    "type": "array",
                    "items": {"type": "integer"},
                    "description": "Gradient: outputs driving front-facing cabinets"
                },
                "reversed_outputs": {
                    "type": "array",
                    "items": {"type": "integer"},
                    "description": "Gradient: outputs driving reversed cabinets"
                },
                "link_group": {
                    "type": "integer",
                    "minimum": 0,
                    "maximum": 8,
                    "description": "Output link group to assign (0 = none)"
                },
                "link_group_enable": {"type": "boolean"},
                "reset_to_factory": {"type": "boolean"},
                "preview": {
                    "type": "boolean",
                    "description": "Return the command batch without sending it"
                }
            },
            "required": ["mode"]
        }
    },
    {
        "name": "lmbc_configure",
        "description": "Configure one Low-Mid Beam Control array directly, including its bypass state. Out-of-range values are clamped.",
        "input_schema": {
            "type": "object",
            "properties": {
                "array_index": {"type": "integer", "minimum": 1, "maximum": 4},
                "product_type": {
                    "type": "string",
                    "description": "Product type code ('0'-'9') or model key (e.g., 'LYON')"
                },
                "number_of_elements": {"type": "integer", "description": "8-32"},
                "elements_per_output": {"type": "integer", "enum": [1, 2]},
                "starting_output": {"type": "integer"},
                "starting_element": {"type": "integer", "description": "1-32"},
                "beam_angle": {"type": "number", "description": "10-99 degrees"},
                "control_type": {"type": "string", "enum": ["0", "1"]},
                "bypass": {"type": "boolean"}
            }
        }
    },
    {
        "name": "lmbc_status",
        "description": "Read the last status the Galaxy reported for a beam control array.",
        "input_schema": {
            "type": "object",
            "properties": {
                "array_index": {"type": "integer", "minimum": 1, "maximum": 4}
            }
        }
    },
    {
        "name": "device_variables",
        "description": "Current mirrored device values: output names, link group assignment and bypass, and LMBC status.",
        "input_schema": {
            "type": "object",
            "properties": {}
        }
    }
]
