"""
Command Line Interface for the world scanner.
Generates or loads a world and drives a scanner session from a scripted command list.
"""

import argparse
import logging
import sys
from typing import Any, Dict, Optional

from ..cfg import ScannerConfig
from ..core.scanner import BIOME_DOMAIN, ROAD_DOMAIN, CategoryBuilder, WorldScanner
from ..core.world import (
    Announcer,
    CameraSink,
    GraphRoutePlanner,
    InMemoryWorldObjects,
    SpeechPriority,
    ViewState,
    WorldGraph,
    create_planar_world,
    create_sphere_world,
    generate_world_objects,
)


COMMANDS = {
    'next-category': 'next_category',
    'prev-category': 'previous_category',
    'next-subcategory': 'next_subcategory',
    'prev-subcategory': 'previous_subcategory',
    'next-item': 'next_item',
    'prev-item': 'previous_item',
    'next-instance': 'next_instance',
    'prev-instance': 'previous_instance',
    'jump': 'jump_to_current',
    'distance': 'read_distance_and_direction',
    'auto-jump': 'toggle_auto_jump',
    'reset': 'reset',
}

DOMAINS = {'biome': BIOME_DOMAIN, 'road': ROAD_DOMAIN}


class PrintAnnouncer(Announcer):
    """Writes announcements to stdout, high priority ones marked with '!'"""

    def speak(self, text: str, priority: SpeechPriority = SpeechPriority.NORMAL) -> None:
        marker = '!' if priority is SpeechPriority.HIGH else '>'
        print(f"{marker} {text}")


class LoggingCamera(CameraSink):

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    def select(self, world_object, tile: int) -> None:
        label = world_object.label if world_object is not None else 'tile'
        self.logger.info(f"Selected {label} at {tile}")

    def jump_to(self, tile: int) -> None:
        self.logger.info(f"Camera jumped to {tile}")

    def orient_north(self) -> None:
        self.logger.debug("Camera rotated north-up")


def create_parser():
    """Create argument parser for CLI"""
    parser = argparse.ArgumentParser(
        description="World scanner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
        Examples:
        %(prog)s demo --shape sphere --size 24 --commands next-category,next-item,jump,distance
        %(prog)s demo --commands auto-jump,next-category,next-item --override clustering.max_radius=30
        %(prog)s regions --domain road --origin 120 --map world.json
        """
    )
    parser.add_argument('--verbose', '-v', action='store_true', help='Log at INFO level')
    subparsers = parser.add_subparsers(dest='command', help='Command')

    demo_parser = subparsers.add_parser('demo', help='Run a scripted scanner session')
    _add_world_arguments(demo_parser)
    demo_parser.add_argument('--commands', default='next-category,next-item,jump,distance',
                             help=f"Comma separated commands: {', '.join(COMMANDS)}")
    demo_parser.add_argument('--origin', type=int, help='Initially selected tile (default: home settlement)')
    demo_parser.add_argument('--waypoints', help='Comma separated route waypoint tiles')
    demo_parser.add_argument('--auto-jump', action='store_true', help='Start with auto-jump enabled')

    regions_parser = subparsers.add_parser('regions', help='Print clustered regions around a tile')
    _add_world_arguments(regions_parser)
    regions_parser.add_argument('--domain', choices=list(DOMAINS), default='biome', help='Region domain')
    regions_parser.add_argument('--origin', type=int, default=0, help='Origin tile')

    return parser


def _add_world_arguments(subparser) -> None:
    subparser.add_argument('--shape', choices=['planar', 'sphere'], help='Generated world shape')
    subparser.add_argument('--size', type=int, help='Grid width (planar) or row count (sphere)')
    subparser.add_argument('--seed', type=int, help='Generation seed')
    subparser.add_argument('--map', help='JSON map file to load instead of generating one')
    subparser.add_argument('--config', help='YAML config merged over the defaults')
    subparser.add_argument('--override', action='append',
                           help='Override config parameter using dot notation (e.g., cache.staleness_distance=25)')


def parse_overrides(override_args) -> Dict[str, Any]:
    """Parse CLI override arguments into parameter dictionary"""
    overrides = {}

    if not override_args:
        return overrides

    for override in override_args:
        if '=' not in override:
            continue

        key, value = override.split('=', 1)

        try:
            if value.lower() in ('true', 'false'):
                value = value.lower() == 'true'
            elif '.' in value:
                value = float(value)
            else:
                value = int(value)
        except ValueError:
            pass  # Keep as string

        overrides[key] = value

    return overrides


def load_config(args) -> ScannerConfig:
    overrides = parse_overrides(getattr(args, 'override', None))
    for name in ('shape', 'size', 'seed'):
        value = getattr(args, name, None)
        if value is not None:
            overrides[f'world.{name}'] = value
    return ScannerConfig.from_params(getattr(args, 'config', None), **overrides)


def build_world(config: ScannerConfig, map_file: Optional[str] = None) -> WorldGraph:
    if map_file:
        return WorldGraph.from_json(map_file)
    world = config.world
    if world.shape == 'sphere':
        return create_sphere_world(world.size, seed=world.seed, biome_count=world.biome_count,
                                   road_count=world.road_count, orbit_tiles=1)
    return create_planar_world(world.size, world.size, seed=world.seed, biome_count=world.biome_count,
                               road_count=world.road_count, orbit_tiles=1)


def run_demo(args, config: ScannerConfig) -> int:
    graph = build_world(config, args.map)
    objects = generate_world_objects(graph, seed=config.world.seed)

    planner = None
    if args.waypoints:
        planner = GraphRoutePlanner(graph, [int(t) for t in args.waypoints.split(',')])

    origin = args.origin if args.origin is not None else objects.settlements()[0].tile
    view = ViewState(selected_tile=origin)
    scanner = WorldScanner(graph, objects, PrintAnnouncer(), LoggingCamera(), view, config, route_planner=planner)
    scanner.init()
    if args.auto_jump:
        scanner.toggle_auto_jump()

    for name in [c.strip() for c in args.commands.split(',') if c.strip()]:
        if name not in COMMANDS:
            raise ValueError(f"Unknown command '{name}', expected one of: {', '.join(COMMANDS)}")
        getattr(scanner, COMMANDS[name])()

    scanner.teardown()
    return 0


def run_regions(args, config: ScannerConfig) -> int:
    graph = build_world(config, args.map)
    if not graph.is_valid(args.origin):
        raise ValueError(f"Origin tile {args.origin} is not on the map")
    builder = CategoryBuilder(graph, InMemoryWorldObjects(), config)
    domain = DOMAINS[args.domain]
    regions_by_label = builder.cache.get(domain, args.origin, builder.clusterers[domain].cluster)

    for label, regions in regions_by_label.items():
        print(f"{label}: {len(regions)} regions")
        for region in regions:
            print(f"  tile {region.center_tile}, {region.size_description}, {region.distance:.1f} away")
    return 0


def main(argv=None):
    """Main CLI entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    try:
        config = load_config(args)

        if args.command == 'demo':
            return run_demo(args, config)
        elif args.command == 'regions':
            return run_regions(args, config)

        return 0

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 1
    except Exception as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
