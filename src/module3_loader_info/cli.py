"""
Command line inspection of a movie's loader info.

Usage:
    python -m src.module3_loader_info movie.swf
    python -m src.module3_loader_info movie.swf --dump-bytes out.swf --verbose
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..module1_swf_format import SwfFormatError
from .config import load_config
from .errors import LoaderInfoError
from .library import ContentRoot, MovieLibrary, PlayerContext
from .loader_info import LoaderInfo
from .movie import SwfMovie


def setup_logging(verbose: bool = False):
    """Configure logging for the command line tool."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Print loader info for a SWF movie',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m src.module3_loader_info game.swf
  python -m src.module3_loader_info game.swf --dump-bytes game_uncompressed.swf
        """
    )
    parser.add_argument('movie', type=Path, help='Path to .swf file')
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to configuration YAML file (default: bundled default_config.yaml)'
    )
    parser.add_argument(
        '--url',
        type=str,
        default=None,
        help='URL to report for the movie (default: file URI of the movie path)'
    )
    parser.add_argument(
        '--dump-bytes',
        type=Path,
        default=None,
        help='Write the reconstructed uncompressed container to this path'
    )
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    setup_logging(args.verbose or config['system'].get('verbose', False))

    try:
        data = args.movie.read_bytes()
    except OSError as e:
        logging.error(f"Cannot read {args.movie}: {e}")
        return 1

    url = args.url or args.movie.resolve().as_uri()

    try:
        movie = SwfMovie.from_bytes(data, url=url)
    except SwfFormatError as e:
        logging.error(f"Not a valid SWF container: {e}")
        return 1

    library = MovieLibrary()
    root = ContentRoot(args.movie.stem, movie=movie)
    library.register(movie, root)
    context = PlayerContext(stage_movie=movie, library=library, config=config)
    loader_info = LoaderInfo.for_movie(movie, context)

    for name in LoaderInfo.property_names():
        if name == 'bytes':
            continue
        try:
            value = loader_info.get_property(name)
        except LoaderInfoError as e:
            value = f"<{e}>"
        print(f"{name:20s} {value}")

    if args.dump_bytes is not None:
        try:
            output = loader_info.bytes
        except LoaderInfoError as e:
            logging.error(f"Reconstruction failed: {e}")
            return 1
        args.dump_bytes.write_bytes(output.to_bytes())
        logging.info(f"Wrote {len(output)} bytes to {args.dump_bytes}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
