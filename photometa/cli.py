"""
Command-Line Interface for photometa

Provides commands for dumping and editing image metadata.
"""

import argparse
import json
import logging
import sys

from .config import DEFAULT_CONFIG_PATH, load_config
from .image_session import ImageFactory

logger = logging.getLogger(__name__)

NAMESPACES = ['exif', 'iptc', 'xmp']


def _view(image, namespace: str):
    return getattr(image, f"{namespace}_data")()


def _open(args, path: str):
    image = args.factory.open_image(path)
    image.read_metadata()
    return image


def cmd_dump(args):
    """Print the metadata of an image."""
    namespaces = [args.namespace] if args.namespace else NAMESPACES

    with _open(args, args.path) as image:
        if args.json:
            document = {ns: _view(image, ns).to_dict() for ns in namespaces}
            print(json.dumps(document, indent=2, default=str, ensure_ascii=False))
            return

        for ns in namespaces:
            for key, value in _view(image, ns):
                print(f"{key:50} {value!r}")


def cmd_set(args):
    """Add a metadata entry and write the image."""
    with _open(args, args.path) as image:
        if not _view(image, args.namespace).add(args.key, args.value):
            logger.error(f"✗ Could not add {args.key}")
            sys.exit(1)
        image.write_metadata()
    logger.info(f"✓ Set {args.key} in {args.path}")


def cmd_delete(args):
    """Remove the first entry with a key and write the image."""
    with _open(args, args.path) as image:
        if not _view(image, args.namespace).delete(args.key):
            logger.warning(f"No entry {args.key} in {args.path}")
            return
        image.write_metadata()
    logger.info(f"✓ Deleted {args.key} from {args.path}")


def cmd_copy(args):
    """Copy all metadata from one image to another."""
    with _open(args, args.source) as source, _open(args, args.target) as target:
        source.copy_metadata_to(target)
        target.write_metadata()
    logger.info(f"✓ Copied metadata from {args.source} to {args.target}")


def cmd_clear(args):
    """Remove all metadata from an image."""
    with _open(args, args.path) as image:
        image.clear()
        image.write_metadata()
    logger.info(f"✓ Cleared metadata in {args.path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='photometa',
        description='Typed EXIF, IPTC and XMP metadata access',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  # Show all metadata of an image
  photometa dump photo.jpg

  # Show IPTC metadata as JSON
  photometa dump photo.jpg --namespace iptc --json

  # Add a keyword
  photometa set photo.jpg iptc Iptc.Application2.Keywords concert

  # Copy metadata between images
  photometa copy original.jpg edited.jpg
        '''
    )

    parser.add_argument('--config', default=DEFAULT_CONFIG_PATH, help='Path to config file')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    dump_parser = subparsers.add_parser('dump', help='Print image metadata')
    dump_parser.add_argument('path', help='Image file')
    dump_parser.add_argument('--namespace', choices=NAMESPACES, help='Only this namespace')
    dump_parser.add_argument('--json', action='store_true', help='Print JSON')
    dump_parser.set_defaults(func=cmd_dump)

    set_parser = subparsers.add_parser('set', help='Add a metadata entry')
    set_parser.add_argument('path', help='Image file')
    set_parser.add_argument('namespace', choices=NAMESPACES, help='Metadata namespace')
    set_parser.add_argument('key', help='Full key, e.g. Exif.Image.Artist')
    set_parser.add_argument('value', help='Value text')
    set_parser.set_defaults(func=cmd_set)

    delete_parser = subparsers.add_parser('delete', help='Delete a metadata entry')
    delete_parser.add_argument('path', help='Image file')
    delete_parser.add_argument('namespace', choices=NAMESPACES, help='Metadata namespace')
    delete_parser.add_argument('key', help='Full key')
    delete_parser.set_defaults(func=cmd_delete)

    copy_parser = subparsers.add_parser('copy', help='Copy metadata between images')
    copy_parser.add_argument('source', help='Image to copy from')
    copy_parser.add_argument('target', help='Image to overwrite')
    copy_parser.set_defaults(func=cmd_copy)

    clear_parser = subparsers.add_parser('clear', help='Remove all metadata')
    clear_parser.add_argument('path', help='Image file')
    clear_parser.set_defaults(func=cmd_clear)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    try:
        config = load_config(args.config)
        logging.basicConfig(
            level=config['logging']['level'].upper(),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        args.factory = ImageFactory.from_settings(config)
        args.func(args)
    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
