"""Migration script: rebuild the brands collection from the dirty fixture.

This script:
1. Connects to MongoDB (MONGODB_URI must be set)
2. Clears the brands collection
3. Imports the dirty fixture records, keeping their _id values
4. Normalizes every imported record in place
5. Seeds synthetic valid brands
6. Exports the whole collection to JSON
7. Disconnects

Usage:
    python scripts/run_all.py [--fixture PATH] [--output PATH] [--seed-count N] [--seed N]

Exits non-zero if the connection fails or any step raises.
"""
import argparse
import logging
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import config
from brand_migrator.services.migration_service import run_all


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Normalize the brands collection and export it')
    parser.add_argument('--fixture', default=None, help=f'Dirty fixture JSON (default: {config.FIXTURE_PATH})')
    parser.add_argument('--output', default=None, help=f'Export file (default: {config.EXPORT_PATH})')
    parser.add_argument('--seed-count', type=int, default=None, help=f'Synthetic brands to add (default: {config.SEED_COUNT})')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for reproducible synthetic brands')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT,
                        datefmt=config.LOG_DATE_FORMAT, stream=sys.stdout)
    try:
        config.validate_required()
    except RuntimeError as e:
        logging.getLogger(__name__).error(str(e))
        return 1
    return run_all(config, fixture_path=args.fixture, export_path=args.output,
                   seed_count=args.seed_count, seed=args.seed)


if __name__ == '__main__':
    sys.exit(main())
