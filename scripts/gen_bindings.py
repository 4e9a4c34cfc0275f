#!/usr/bin/env python3
"""
gen_bindings.py - CEF wrapper binding generator entry point

Generates Rust wrappers from the bindgen output of the CEF C headers.

Usage:
    python scripts/gen_bindings.py PATH/TO/bindings.rs [--out-dir DIR] [--no-format] [--verbose]
"""

import argparse
import logging
import os
import sys

# Get paths
script_dir = os.path.dirname(os.path.abspath(__file__))

# Add scripts directory to path
sys.path.insert(0, script_dir)

from cef_bindgen import BindingError, Generator, GeneratorConfig


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Generate CEF Rust wrappers')
    parser.add_argument('source', help='bindgen-generated declaration file')
    parser.add_argument('--out-dir', default=os.environ.get('OUT_DIR', os.getcwd()),
                        help='Output directory (default: $OUT_DIR, else the current directory)')
    parser.add_argument('--no-format', action='store_true',
                        help='Do not run rustfmt on the generated file')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log every excluded declaration')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    config = GeneratorConfig()
    if args.no_format:
        config.formatter = ()

    gen = Generator(output_root=args.out_dir, config=config)
    try:
        gen.generate(args.source)
    except BindingError as e:
        print(f'  >> error: {e}', file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
