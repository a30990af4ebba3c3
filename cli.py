#!/usr/bin/env python3
"""
Music Convert CLI

Batch-convert audio files with ffmpeg, tagging each output with metadata
(and optionally cover art) taken from a conversion manifest.

Usage:
    python cli.py <command> [options]

Commands:
    convert [manifest]       Convert every track listed in the manifest
    verify [manifest]        Check converted files carry the manifest tags
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from conversion.errors import OperatorExit  # noqa: E402


def load_config(args):
    from orchestrator.config import ConfigManager, DEFAULT_CONFIG_PATH

    # Only warn about a missing file the user asked for explicitly
    return ConfigManager(args.config or DEFAULT_CONFIG_PATH, quiet=args.config is None)


def cmd_convert(args):
    """Convert all tracks in the manifest."""
    from conversion.overwrite import OverwriteArbiter, OverwritePolicy
    from orchestrator.batch import BatchConverter
    from orchestrator.runner import ProcessRunner
    from orchestrator.manifest import load_manifest
    from utilities.album_art import AlbumArtResolver

    config = load_config(args)

    manifest_path = args.manifest or config.manifest_path
    policy = OverwritePolicy(args.overwrite) if args.overwrite else config.overwrite_policy
    extension = (args.extension or config.extension).lstrip('.')
    copy = args.copy or config.copy

    converter = BatchConverter(
        arbiter=OverwriteArbiter(policy),
        runner=ProcessRunner(config.transcoder_timeout),
        art=AlbumArtResolver(config.art_download_dir, config.art_timeout),
        extension=extension,
        copy=copy,
        tool=config.transcoder,
        dry_run=args.dry_run
    )

    converter.print_configuration(manifest_path)
    albums = load_manifest(manifest_path)
    converter.run(albums)

    if args.dry_run:
        print("(Dry run - no files converted)")

    if args.pause or config.pause_on_exit:
        print("\nPress the Enter key to exit.")
        sys.stdin.readline()

    return 0


def cmd_verify(args):
    """Verify tags of converted files against the manifest."""
    from orchestrator.manifest import load_manifest
    from utilities.verify_tags import TagVerifier

    config = load_config(args)

    manifest_path = args.manifest or config.manifest_path
    extension = (args.extension or config.extension).lstrip('.')

    verifier = TagVerifier(extension)
    issues = verifier.verify(load_manifest(manifest_path))

    print(f"\n=== Verification Results ===")
    print(f"Tracks checked: {verifier.checked}")
    print(f"Issues found: {len(issues)}")

    return 1 if issues else 0


def build_parser():
    parser = argparse.ArgumentParser(
        prog='music-convert',
        description='Batch audio conversion with metadata tagging',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('--config', default=None,
                        help='YAML configuration file (default: convert-config.yaml)')

    # Subcommands accept --config too, without clobbering a top-level value
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--config', default=argparse.SUPPRESS,
                        help='YAML configuration file (default: convert-config.yaml)')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # convert command
    convert_parser = subparsers.add_parser('convert', parents=[common], help='Convert tracks listed in a manifest')
    convert_parser.add_argument('manifest', nargs='?',
                                help='Manifest file (default: convert_data.json)')
    convert_parser.add_argument('-o', '--overwrite', choices=['yes', 'no', 'undecided'],
                                help='Overwrite existing files: always (yes), never (no), '
                                     'or ask for each file (undecided)')
    convert_parser.add_argument('-c', '--copy', action='store_true',
                                help='Pass "-codec copy" to the transcoder')
    convert_parser.add_argument('-e', '--extension',
                                help='File extension of converted files (default: flac)')
    convert_parser.add_argument('--dry-run', action='store_true',
                                help='Print commands without running them')
    convert_parser.add_argument('--pause', action='store_true',
                                help='Wait for Enter before exiting')
    convert_parser.set_defaults(func=cmd_convert)

    # verify command
    verify_parser = subparsers.add_parser('verify', parents=[common], help='Check tags of converted files')
    verify_parser.add_argument('manifest', nargs='?',
                               help='Manifest file (default: convert_data.json)')
    verify_parser.add_argument('-e', '--extension',
                               help='File extension of converted files (default: flac)')
    verify_parser.set_defaults(func=cmd_verify)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except OperatorExit:
        return 0
    except KeyboardInterrupt:
        print("\nOperation cancelled.")
        return 130
    except Exception as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
