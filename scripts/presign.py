#!/usr/bin/env python3
"""
Print a presigned upload or download URL.

Runs the same startup sequence as the API (settings validation and the
bucket reachability check) and then signs a single URL, without starting a
web server.

Usage:
    python scripts/presign.py upload avatar.png --expire-minutes 5
    python scripts/presign.py download reports/q3.pdf --force-prefix

Requires:
    - S3M_* settings in the environment or a .env file
"""

import sys
from pathlib import Path

# Add project root to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def build_parser():
    import argparse

    parser = argparse.ArgumentParser(description='Generate a presigned URL')
    parser.add_argument('operation', choices=['upload', 'download'], help='Kind of URL to sign')
    parser.add_argument('key', help='Object key in the bucket')
    parser.add_argument('--expire-minutes', type=int, default=1, help='Link validity in minutes (minimum 1)')
    parser.add_argument('--force-prefix', action='store_true', help='Put the key under S3M_BUCKET__PREFIX')
    return parser


def main(argv=None):
    from s3m.bootstrap import bootstrap
    from s3m.config.settings import ConfigValidationError
    from s3m.core.presign import PresignError
    from s3m.infrastructure.storage.client import StartupError

    args = build_parser().parse_args(argv)

    try:
        components = bootstrap()
    except ConfigValidationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except StartupError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    service = components.service
    presign = service.presign_upload if args.operation == 'upload' else service.presign_download

    try:
        result = presign(args.key, args.expire_minutes, force_prefix=args.force_prefix)
    except PresignError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(result.url)
    return 0


if __name__ == '__main__':
    sys.exit(main())
