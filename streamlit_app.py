"""
Galaxy Array Designer - line array form
Shows only the options that apply, previews the command batch, and sends it
"""

import streamlit as st

from galaxy_devices import ArrayRequest, ArrayValidationError, load_catalog, load_config, preview_line_array
from galaxy_devices.visibility import visible_options

# Import tools
from tools import execute_tool

config = load_config()

# Page config
st.set_page_config(
    page_title=config["ui"]["page_title"],
    page_icon=config["ui"]["page_icon"],
    layout="wide"
)


@st.cache_resource
def get_catalog(path):
    return load_catalog(path)


catalog = get_catalog(config["catalog"].get("starting_points"))
num_outputs = int(config["device"]["num_outputs"])

st.title(f"{config['ui']['page_icon']} {config['ui']['page_title']}")
st.caption("Line array design for Galaxy processors")

options = {}


def shown(option_id):
    # Re-evaluated as fields are filled in, top to bottom
    return visible_options(options, catalog)[option_id]


def label_for(key):
    entry = catalog.speaker(key)
    return entry.label if entry else key


speakers = [s.key for s in (catalog.line_array_speakers() or catalog.sorted_speakers())]

left, right = st.columns(2)

with left:
    st.subheader("Primary")
    options["primary_speaker"] = st.selectbox("Speaker", speakers, format_func=label_for)
    options["primary_elements"] = st.number_input("Elements", min_value=1, max_value=32, value=12)
    options["elements_per_output"] = st.radio("Elements per output", [1, 2], horizontal=True)
    options["start_output"] = st.number_input("Starting output", min_value=1, max_value=num_outputs, value=1)

    primary = catalog.speaker(options["primary_speaker"])
    if shown("primary_phase"):
        options["primary_phase"] = st.selectbox(
            "Phase", [p.id for p in primary.phases],
            format_func=lambda pid: pid.upper())
    if shown("primary_starting_point"):
        points = catalog.starting_points(options["primary_speaker"])
        titles = {sp.id: sp.title for sp in points}
        options["primary_starting_point"] = st.selectbox(
            "Starting point", [""] + list(titles),
            format_func=lambda sid: titles.get(sid, "-- None --"))

    if shown("mixed_array"):
        options["mixed_array"] = st.checkbox(
            f"Mixed array with {label_for(catalog.secondary_for(options['primary_speaker']))}")

with right:
    if shown("secondary_speaker"):
        st.subheader("Secondary")
        compatible = catalog.secondary_for(options["primary_speaker"])
        options["secondary_speaker"] = compatible
        st.text_input("Speaker", value=label_for(compatible), disabled=True)
        options["secondary_elements"] = st.number_input(
            "Secondary elements", min_value=1, max_value=32, value=6)
        if shown("secondary_phase"):
            secondary = catalog.speaker(compatible)
            options["secondary_phase"] = st.selectbox(
                "Secondary phase", [p.id for p in secondary.phases],
                format_func=lambda pid: pid.upper())
        if shown("secondary_starting_point"):
            points = catalog.starting_points(compatible)
            titles2 = {sp.id: sp.title for sp in points}
            options["secondary_starting_point"] = st.selectbox(
                "Secondary starting point", [""] + list(titles2),
                format_func=lambda sid: titles2.get(sid, "-- None --"))

    st.subheader("Output options")
    options["link_group"] = st.selectbox(
        "Link group", list(range(0, 9)),
        format_func=lambda g: f"Group {g}" if g else "None")
    if shown("link_group_enable"):
        options["link_group_enable"] = st.checkbox("Enable link group", value=True)
    options["reset_to_factory"] = st.checkbox("Reset outputs to factory defaults")

    if shown("enable_lmbc"):
        options["enable_lmbc"] = st.checkbox("Configure LMBC")
    if shown("lmbc_array_index"):
        options["lmbc_array_index"] = st.selectbox("LMBC array", [1, 2, 3, 4])
        options["lmbc_beam_angle"] = st.slider("Beam angle", min_value=10, max_value=99, value=15)
        options["lmbc_control_type"] = st.radio(
            "Control type", ["0", "1"], horizontal=True,
            format_func=lambda c: "Spread" if c == "0" else "Steer Up")
        options["lmbc_starting_element"] = st.number_input(
            "Starting element", min_value=1, max_value=32, value=1)

st.divider()

request = ArrayRequest.from_options(options, catalog)
try:
    commands = preview_line_array(request, catalog, num_outputs)
except ArrayValidationError as e:
    commands = []
    st.warning(str(e))

with st.expander(f"Command preview ({len(commands)} commands)"):
    st.code("\n".join(commands) or "(nothing to send)")

if st.button("Send to Galaxy", type="primary", disabled=not commands):
    with st.spinner("Sending..."):
        result = execute_tool("line_array_design", options)
    if result["status"] == "success":
        st.success(result["message"])
        st.dataframe(result.get("outputs", []), use_container_width=True)
    elif result["status"] == "rejected":
        st.warning(result["message"])
    else:
        st.error(result["message"])

# Sidebar with device info
with st.sidebar:
    st.header("Device")
    st.write(f"**Host:** {config['device']['host']}:{config['device']['port']}")
    st.write(f"**Handler:** {config['device']['handler']}")
    st.write(f"**Outputs:** {num_outputs}")

    st.divider()

    if st.button("Refresh status"):
        st.session_state.variables = execute_tool("device_variables", {})

    variables = st.session_state.get("variables")
    if variables:
        if variables["status"] == "success":
            values = variables["variables"]
            for idx in range(1, 5):
                st.write(f"**LMBC {idx}:** {values.get(f'lmbc_{idx}_status', '')}")
            with st.expander("All variables"):
                st.json(values)
        else:
            st.error(variables["message"])
