#!/usr/bin/env python3
"""
Galaxy Array: line array design, subwoofer design and LMBC setup for Galaxy processors
Talks the Galaxy ASCII protocol (TCP port 25003) or prints a dry run

Reads device settings from config.toml (override with --config or $GALAXY_CONFIG)
"""
import argparse
import asyncio
import logging
import time

from galaxy_devices import (
    ArrayRequest,
    DeviceState,
    GalaxyError,
    HandlerRegistry,
    load_catalog,
    load_config,
)
from galaxy_devices.actions import design_line_array, lmbc_configure, subwoofer_design
from galaxy_devices.sub_design import MODES

STATUS_WAIT = 2.0  # seconds to collect subscription replies for --status


def _do_list(catalog):
    """Print known speaker models by category"""
    groups = [
        ("Line array", catalog.line_array_speakers()),
        ("Subwoofer", catalog.subwoofer_speakers()),
    ]
    categorized = {s.key for _, entries in groups for s in entries}
    groups.append(("Other", [s for s in catalog.sorted_speakers() if s.key not in categorized]))

    for title, entries in groups:
        if not entries:
            continue
        print(f"{title}:")
        for s in entries:
            phases = ', '.join(p.id for p in s.phases) or '-'
            print(f"  {s.key:<14} {s.label:<18} phases: {phases}")
            secondary = catalog.secondary_for(s.key)
            if secondary:
                print(f"      Mixed array with: {secondary}")
            for sp in catalog.starting_points(s.key):
                print(f"      Starting point [{sp.id}] {sp.title} ({len(sp.control_points)} commands)")
        print()


def _design_options(args) -> dict:
    return {
        'primary_speaker': args.primary,
        'primary_elements': args.elements,
        'elements_per_output': args.per_output,
        'start_output': args.start,
        'mixed_array': args.mixed or bool(args.secondary),
        'secondary_speaker': args.secondary,
        'secondary_elements': args.secondary_elements,
        'primary_phase': args.phase,
        'secondary_phase': args.secondary_phase,
        'primary_starting_point': args.starting_point,
        'secondary_starting_point': args.secondary_starting_point,
        'link_group': args.link_group,
        'link_group_enable': not args.disable_link_group,
        'reset_to_factory': args.reset,
        'enable_lmbc': args.lmbc,
        'lmbc_array_index': args.array_index,
        'lmbc_beam_angle': args.beam_angle,
        'lmbc_control_type': '1' if args.steer_up else '0',
        'lmbc_starting_element': args.starting_element,
    }


def _output_list(text) -> list:
    """'1,2,5' -> [1, 2, 5]"""
    return [int(part) for part in str(text or '').split(',') if part.strip()]


def _sub_options(args) -> dict:
    return {
        'mode': args.sub,
        'speaker': args.sub_speaker,
        'starting_point': args.sub_starting_point,
        'reversed_starting_point': args.reversed_starting_point,
        'frequency': args.freq,
        'temperature': args.temp,
        'temperature_unit': 'F' if args.fahrenheit else 'C',
        'taps': [_output_list(tap) for tap in args.tap or []],
        'num_subs': args.subs,
        'start_output': args.sub_start,
        'row_starts': args.row_start or [],
        'spacing': args.spacing,
        'units': 'ft' if args.feet else 'm',
        'arc_angle': args.arc_angle,
        'front_outputs': _output_list(args.front),
        'reversed_outputs': _output_list(args.reversed),
        'link_group': args.link_group,
        'link_group_enable': not args.disable_link_group,
        'reset_to_factory': args.reset,
    }


def _lmbc_options(args) -> dict:
    return {
        'array_index': args.array_index,
        'product_type': args.primary,
        'number_of_elements': args.elements,
        'elements_per_output': args.per_output,
        'starting_output': args.start,
        'starting_element': args.starting_element,
        'beam_angle': args.beam_angle,
        'control_type': '1' if args.steer_up else '0',
        'bypass': args.bypass,
    }


def _print_result(result, handler):
    print(f"[{result.status}] {result.message}")
    for out in result.details.get('outputs', []):
        if 'position' in out:
            line = f"  Output {out['output']:>2}: {out['position']}"
            if out['delay_ms'] is not None:
                line += f", {out['delay_ms']:.2f} ms"
            if out['starting_point']:
                line += f", {out['starting_point']}"
            print(line)
            continue
        line = (f"  Output {out['output']:>2}: {out['speaker']} "
                f"elements {out['first_element']}-{out['last_element']}")
        if out['delay_ms']:
            line += f", {out['delay_ms']:.2f} ms"
        if out['starting_point']:
            line += f", {out['starting_point']}"
        print(line)
    if result.ok:
        print(f"Sent {result.commands_sent} commands via {handler.name}")


def _do_status(handler, state):
    """Subscribe, collect replies for a moment, and print mirrored values"""
    if hasattr(handler, 'subscribe'):
        handler.subscribe(state.subscription_paths())
        deadline = time.monotonic() + STATUS_WAIT
        while time.monotonic() < deadline:
            for line in handler.read_lines():
                state.apply_line(line)

    print(f"Outputs: {state.num_outputs}")
    for ch in range(1, state.num_outputs + 1):
        group = state.output_link_group.get(ch, 0)
        print(f"  {state.output_label(ch):<24} link group: {group if group else 'Unassigned'}")
    print("Link groups bypassed: " + (', '.join(
        str(g) for g, bypassed in sorted(state.link_group_bypass.items()) if bypassed) or 'none'))
    for idx in range(1, 5):
        print(f"LMBC array {idx}: {state.lmbc_status_preview(idx)}")


def main():
    parser = argparse.ArgumentParser(
        description='Galaxy Array: line array, subwoofer and LMBC setup for Galaxy processors',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --list                                   List speaker models
  %(prog)s --design --primary LEO --elements 12     12 x LEO from output 1
  %(prog)s --design --primary LINA --elements 12 --mixed --secondary-elements 4
  %(prog)s --design --primary LYON --per-output 2 --start 5 --link-group 2 --lmbc
  %(prog)s --sub endfire --freq 60 --tap 1,2 --tap 3,4 --sub-speaker 1100_LFC
  %(prog)s --sub array --subs 8 --sub-start 9 --spacing 1.5 --arc-angle 60
  %(prog)s --sub gradient --sub-speaker 1100_LFC --front 1,2 --reversed 3
  %(prog)s --lmbc-only --primary LYON --elements 16 --beam-angle 20 --steer-up
  %(prog)s --status                                 Show names, link groups, LMBC status
  %(prog)s --dry-run --design --primary LEO         Print commands instead of sending

Device:
  Host, port and handler come from config.toml. --host/--port override them.
        """
    )

    # Create mutually exclusive group for actions
    action_group = parser.add_mutually_exclusive_group()
    action_group.add_argument('--list', '-l', action='store_true',
        help='List speaker models and starting points, then exit')
    action_group.add_argument('--design', action='store_true',
        help='Design a line array and send it')
    action_group.add_argument('--sub', choices=MODES, metavar='MODE',
        help=f"Design subwoofers ({', '.join(MODES)})")
    action_group.add_argument('--lmbc-only', action='store_true',
        help='Configure one LMBC array directly')
    action_group.add_argument('--status', action='store_true',
        help='Show mirrored device values (default action)')

    design = parser.add_argument_group('array options')
    design.add_argument('--primary', '-p', type=str, default='', help='Primary speaker model (e.g., LEO)')
    design.add_argument('--elements', '-n', type=int, default=0, help='Primary element count')
    design.add_argument('--per-output', type=int, default=1, choices=(1, 2), help='Elements per output')
    design.add_argument('--start', type=int, default=1, help='First output number')
    design.add_argument('--mixed', action='store_true', help='Add the compatible secondary model')
    design.add_argument('--secondary', type=str, default='', help='Secondary speaker model')
    design.add_argument('--secondary-elements', type=int, default=0, help='Secondary element count')
    design.add_argument('--phase', type=str, default='', help='Primary phase curve (e.g., pc125)')
    design.add_argument('--secondary-phase', type=str, default='', help='Secondary phase curve')
    design.add_argument('--starting-point', type=str, default='', help='Primary starting point id')
    design.add_argument('--secondary-starting-point', type=str, default='', help='Secondary starting point id')
    design.add_argument('--link-group', type=int, default=0, help='Output link group (1-8, 0 = none)')
    design.add_argument('--disable-link-group', action='store_true', help='Bypass the link group')
    design.add_argument('--reset', action='store_true', help='Reset outputs to factory defaults first')

    sub = parser.add_argument_group('subwoofer options')
    sub.add_argument('--sub-speaker', type=str, default='', help='Subwoofer model (e.g., 1100_LFC)')
    sub.add_argument('--sub-starting-point', type=str, default='',
        help='Starting point id (front cabinets for gradient)')
    sub.add_argument('--reversed-starting-point', type=str, default='',
        help='Starting point id for reversed cabinets (gradient)')
    sub.add_argument('--freq', type=float, default=80, help='End-fire target frequency in Hz')
    sub.add_argument('--temp', type=float, default=20, help='Air temperature (Celsius)')
    sub.add_argument('--fahrenheit', action='store_true', help='--temp is in Fahrenheit')
    sub.add_argument('--tap', action='append', metavar='OUTPUTS',
        help='End-fire tap outputs, e.g. --tap 1,2 --tap 3,4 (T0 first)')
    sub.add_argument('--subs', type=int, default=6, help='Subs per arc row')
    sub.add_argument('--sub-start', type=int, help='First output of the arc row (array)')
    sub.add_argument('--row-start', type=int, action='append',
        help='First output of each row, front first (array_endfire)')
    sub.add_argument('--spacing', type=float, default=1.0, help='Distance between subs in a row')
    sub.add_argument('--feet', action='store_true', help='--spacing is in feet')
    sub.add_argument('--arc-angle', type=float, default=60, help='Total arc angle (0-120 degrees)')
    sub.add_argument('--front', type=str, default='', metavar='OUTPUTS', help='Gradient front outputs')
    sub.add_argument('--reversed', type=str, default='', metavar='OUTPUTS',
        help='Gradient reversed outputs')

    lmbc = parser.add_argument_group('LMBC options')
    lmbc.add_argument('--lmbc', action='store_true', help='Configure LMBC with the array')
    lmbc.add_argument('--array-index', type=int, default=1, help='LMBC array index (1-4)')
    lmbc.add_argument('--beam-angle', type=float, default=15, help='Beam angle (10-99 degrees)')
    lmbc.add_argument('--steer-up', action='store_true', help='Steer Up instead of Spread')
    lmbc.add_argument('--starting-element', type=int, default=1, help='First controlled element')
    lmbc.add_argument('--bypass', action='store_true', help='Bypass the LMBC array (--lmbc-only)')

    # Modifier arguments
    parser.add_argument('--dry-run', action='store_true',
        help='Print commands instead of sending them')
    parser.add_argument('--host', type=str, help='Galaxy IP address (overrides config)')
    parser.add_argument('--port', type=int, help='Galaxy control port (overrides config)')
    parser.add_argument('--config', '-c', type=str, metavar='FILE', help='Path to config.toml')
    parser.add_argument('--debug', action='store_true',
        help='Show debug output including every command line')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        config = load_config(args.config)
        device = config['device']
        catalog = load_catalog(config['catalog'].get('starting_points'))

        # Handle --list action (standalone, no device connection needed)
        if args.list:
            _do_list(catalog)
            return

        state = DeviceState(num_outputs=int(device['num_outputs']))

        registry = HandlerRegistry(debug=args.debug)
        handler = registry.create(
            'dry-run' if args.dry_run else device['handler'],
            host=args.host or device['host'],
            port=args.port or device['port'],
        )

        # Connect to device (only once)
        try:
            handler.connect()
            print(f"Connected: {handler.name}")
            print()

            if args.design or args.lmbc_only or args.sub:
                if args.design:
                    request = ArrayRequest.from_options(_design_options(args), catalog)
                    result = asyncio.run(design_line_array(request, catalog, handler, state))
                elif args.sub:
                    result = asyncio.run(subwoofer_design(_sub_options(args), catalog, handler, state))
                else:
                    result = asyncio.run(lmbc_configure(_lmbc_options(args), handler, state))
                if args.dry_run:
                    for line in handler.sent:
                        print(f"  {line}")
                    print()
                _print_result(result, handler)

            else:
                _do_status(handler, state)

        except GalaxyError as e:
            print(f"\nDevice error: {e}")
            return

        finally:
            handler.disconnect()

    except ValueError as e:
        # Unknown handler name, bad config values
        print(f"\n{e}")

    except Exception as e:
        print(f"\nError: {e}")
        import traceback
        if args.debug:
            traceback.print_exc()


if __name__ == '__main__':
    main()
