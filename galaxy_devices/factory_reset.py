"""Factory default parameter set for one Galaxy output

Every template carries a {ch} placeholder for the output number.
"""

FACTORY_RESET_COMMANDS = (
    "/processing/output/{ch}/allpass/1/band_bypass='true'",
    "/processing/output/{ch}/allpass/1/frequency='32'",
    "/processing/output/{ch}/allpass/1/q='1'",
    "/processing/output/{ch}/allpass/2/band_bypass='true'",
    "/processing/output/{ch}/allpass/2/frequency='64'",
    "/processing/output/{ch}/allpass/2/q='1'",
    "/processing/output/{ch}/allpass/3/band_bypass='true'",
    "/processing/output/{ch}/allpass/3/frequency='128'",
    "/processing/output/{ch}/allpass/3/q='1'",
    "/processing/output/{ch}/allpass/bypass='false'",
    "/processing/output/{ch}/atmospheric/bypass='true'",
    "/processing/output/{ch}/atmospheric/distance='0'",
    "/processing/output/{ch}/atmospheric/gain='10'",
    "/processing/output/{ch}/beam_control_allpass/band_bypass='true'",
    "/processing/output/{ch}/beam_control_allpass/frequency='32'",
    "/processing/output/{ch}/beam_control_allpass/q='1'",
    "/processing/output/{ch}/delay='0'",
    "/processing/output/{ch}/delay_integration/1/band_bypass='true'",
    "/processing/output/{ch}/delay_integration/1/frequency='32'",
    "/processing/output/{ch}/delay_integration/1/q='1'",
    "/processing/output/{ch}/delay_integration/10/band_bypass='true'",
    "/processing/output/{ch}/delay_integration/10/frequency='2048'",
    "/processing/output/{ch}/delay_integration/10/q='1'",
    "/processing/output/{ch}/delay_integration/11/band_bypass='true'",
    "/processing/output/{ch}/delay_integration/11/frequency='2896.3'",
    "/processing/output/{ch}/delay_integration/11/q='1'",
    "/processing/output/{ch}/delay_integration/12/band_bypass='true'",
    "/processing/output/{ch}/delay_integration/12/frequency='4096'",
    "/processing/output/{ch}/delay_integration/12/q='1'",
    "/processing/output/{ch}/delay_integration/13/band_bypass='true'",
    "/processing/output/{ch}/delay_integration/13/frequency='5792.6'",
    "/processing/output/{ch}/delay_integration/13/q='1'",
    "/processing/output/{ch}/delay_integration/14/band_bypass='true'",
    "/processing/output/{ch}/delay_integration/14/frequency='8192'",
    "/processing/output/{ch}/delay_integration/14/q='1'",
    "/processing/output/{ch}/delay_integration/2/band_bypass='true'",
    "/processing/output/{ch}/delay_integration/2/frequency='64'",
    "/processing/output/{ch}/delay_integration/2/q='1'",
    "/processing/output/{ch}/delay_integration/3/band_bypass='true'",
    "/processing/output/{ch}/delay_integration/3/frequency='128'",
    "/processing/output/{ch}/delay_integration/3/q='1'",
    "/processing/output/{ch}/delay_integration/4/band_bypass='true'",
    "/processing/output/{ch}/delay_integration/4/frequency='256'",
    "/processing/output/{ch}/delay_integration/4/q='1'",
    "/processing/output/{ch}/delay_integration/5/band_bypass='true'",
    "/processing/output/{ch}/delay_integration/5/frequency='362'",
    "/processing/output/{ch}/delay_integration/5/q='1'",
    "/processing/output/{ch}/delay_integration/6/band_bypass='true'",
    "/processing/output/{ch}/delay_integration/6/frequency='512'",
    "/processing/output/{ch}/delay_integration/6/q='1'",
    "/processing/output/{ch}/delay_integration/7/band_bypass='true'",
    "/processing/output/{ch}/delay_integration/7/frequency='724.1'",
    "/processing/output/{ch}/delay_integration/7/q='1'",
    "/processing/output/{ch}/delay_integration/8/band_bypass='true'",
    "/processing/output/{ch}/delay_integration/8/frequency='1024'",
    "/processing/output/{ch}/delay_integration/8/q='1'",
    "/processing/output/{ch}/delay_integration/9/band_bypass='true'",
    "/processing/output/{ch}/delay_integration/9/frequency='1448.2'",
    "/processing/output/{ch}/delay_integration/9/q='1'",
    "/processing/output/{ch}/delay_integration/bypass='false'",
    "/processing/output/{ch}/delay_integration/polarity_reversal='false'",
    "/processing/output/{ch}/delay_integration/type='1'",
    "/processing/output/{ch}/delay_type='0'",
    "/processing/output/{ch}/eq/1/band_bypass='false'",
    "/processing/output/{ch}/eq/1/bandwidth='1'",
    "/processing/output/{ch}/eq/1/frequency='32'",
    "/processing/output/{ch}/eq/1/gain='0'",
    "/processing/output/{ch}/eq/10/band_bypass='false'",
    "/processing/output/{ch}/eq/10/bandwidth='1'",
    "/processing/output/{ch}/eq/10/frequency='16000'",
    "/processing/output/{ch}/eq/10/gain='0'",
    "/processing/output/{ch}/eq/2/band_bypass='false'",
    "/processing/output/{ch}/eq/2/bandwidth='1'",
    "/processing/output/{ch}/eq/2/frequency='63'",
    "/processing/output/{ch}/eq/2/gain='0'",
    "/processing/output/{ch}/eq/3/band_bypass='false'",
    "/processing/output/{ch}/eq/3/bandwidth='1'",
    "/processing/output/{ch}/eq/3/frequency='125'",
    "/processing/output/{ch}/eq/3/gain='0'",
    "/processing/output/{ch}/eq/4/band_bypass='false'",
    "/processing/output/{ch}/eq/4/bandwidth='1'",
    "/processing/output/{ch}/eq/4/frequency='250'",
    "/processing/output/{ch}/eq/4/gain='0'",
    "/processing/output/{ch}/eq/5/band_bypass='false'",
    "/processing/output/{ch}/eq/5/bandwidth='1'",
    "/processing/output/{ch}/eq/5/frequency='500'",
    "/processing/output/{ch}/eq/5/gain='0'",
    "/processing/output/{ch}/eq/6/band_bypass='false'",
    "/processing/output/{ch}/eq/6/bandwidth='1'",
    "/processing/output/{ch}/eq/6/frequency='1000'",
    "/processing/output/{ch}/eq/6/gain='0'",
    "/processing/output/{ch}/eq/7/band_bypass='false'",
    "/processing/output/{ch}/eq/7/bandwidth='1'",
    "/processing/output/{ch}/eq/7/frequency='2000'",
    "/processing/output/{ch}/eq/7/gain='0'",
    "/processing/output/{ch}/eq/8/band_bypass='false'",
    "/processing/output/{ch}/eq/8/bandwidth='1'",
    "/processing/output/{ch}/eq/8/frequency='4000'",
    "/processing/output/{ch}/eq/8/gain='0'",
    "/processing/output/{ch}/eq/9/band_bypass='false'",
    "/processing/output/{ch}/eq/9/bandwidth='1'",
    "/processing/output/{ch}/eq/9/frequency='8000'",
    "/processing/output/{ch}/eq/9/gain='0'",
    "/processing/output/{ch}/eq/bypass='false'",
    "/processing/output/{ch}/gain='0'",
    "/processing/output/{ch}/highpass/filter_configure='0'",
    "/processing/output/{ch}/highpass/frequency='20'",
    "/processing/output/{ch}/lowpass/filter_configure='0'",
    "/processing/output/{ch}/lowpass/frequency='20000'",
    "/processing/output/{ch}/mute='false'",
    "/processing/output/{ch}/polarity_reversal='false'",
    "/processing/output/{ch}/solo='false'",
    "/processing/output/{ch}/u_shaping/bypass='false'",
    "/processing/output/{ch}/u_shaping/hf_gain='0'",
    "/processing/output/{ch}/u_shaping/lf_gain='0'",
    "/processing/output/{ch}/u_shaping/lmf_gain='0'",
    "/processing/output/{ch}/u_shaping/selected='0'",
)


def factory_reset_commands(output_number: int) -> list:
    """Factory reset commands for one output"""
    return [cmd.replace('{ch}', str(output_number)) for cmd in FACTORY_RESET_COMMANDS]
