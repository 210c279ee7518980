#!/usr/bin/env python3
"""
Image Catalog - HTTP Service
============================
Serves the catalog of one media directory to the browser-automation
collaborator: distance queries for observed images, saving images the user
keeps, and flushing the catalog when the browser disconnects.

Run with: python -m imagecatalog serve
Or: imagecatalog-serve

Options:
    -q, --quiet      Quiet mode - suppress all output except errors
    -v, --verbose    Verbose mode - show all Flask request logs
    -p, --port       Port to run on (default: 5000)
    -d, --media-dir  Directory holding the images (default: from config)
    --no-scan        Skip the startup scan
"""

import argparse
import atexit
import logging
import os
import sys
from typing import Optional

from flask import Flask

from .api import api
from .catalog import CatalogStore, get_store
from .config import DEFAULT_HOST
from .exceptions import CatalogError
from .user_config import get_user_config


# Logging levels
LOG_QUIET = 0    # No output except errors
LOG_MINIMAL = 1  # Startup info only (default)
LOG_VERBOSE = 2  # All Flask request logs

logger = logging.getLogger(__name__)


def create_app(
    store: CatalogStore,
    log_level: int = LOG_MINIMAL,
    bookmarks: Optional[list] = None,
) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        store: Catalog served by this application
        log_level: Logging verbosity level
        bookmarks: Bookmarks exposed to the collaborator

    Returns:
        Configured Flask app instance
    """
    app = Flask(__name__)
    app.config['CATALOG_STORE'] = store
    app.config['BOOKMARKS'] = bookmarks or []

    # Configure logging based on level
    if log_level < LOG_VERBOSE:
        # Suppress Flask's default request logging
        log = logging.getLogger('werkzeug')
        log.setLevel(logging.ERROR if log_level == LOG_QUIET else logging.WARNING)

    # Register routes
    app.register_blueprint(api)

    return app


def flush_on_exit(store: CatalogStore):
    """Save unsaved catalog changes before the process exits."""
    try:
        if store.flush():
            logger.info("Flushed catalog on exit")
    except CatalogError as e:
        logger.error(f"Could not flush catalog on exit: {e}")


def suppress_flask_banner():
    """Suppress Flask's development server banner and startup messages."""
    try:
        import flask.cli
        flask.cli.show_server_banner = lambda *args, **kwargs: None
    except (ImportError, AttributeError):
        pass

    # Suppress werkzeug's startup log messages
    logging.getLogger('werkzeug').setLevel(logging.ERROR)


def main():
    """Main entry point for the HTTP service."""
    config = get_user_config()

    # Parse command line arguments
    parser = argparse.ArgumentParser(
        description='Image Catalog - HTTP service',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        '-q', '--quiet',
        action='store_true',
        help='Quiet mode - suppress all output except errors'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose mode - show all Flask request logs'
    )
    parser.add_argument(
        '-p', '--port',
        type=int,
        default=config.port,
        help=f'Port to run the server on (default: {config.port})'
    )
    parser.add_argument(
        '-d', '--media-dir',
        default=config.media_dir,
        help=f'Directory holding the images (default: {config.media_dir})'
    )
    parser.add_argument(
        '--no-scan',
        action='store_true',
        help='Do not reconcile the catalog with the directory at startup'
    )

    args = parser.parse_args()

    # Determine log level
    if args.quiet:
        log_level = LOG_QUIET
    elif args.verbose:
        log_level = LOG_VERBOSE
    else:
        log_level = LOG_MINIMAL

    logging.basicConfig(
        level=logging.ERROR if log_level == LOG_QUIET else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    media_dir = os.path.abspath(args.media_dir)
    try:
        os.makedirs(media_dir, exist_ok=True)
    except OSError as e:
        logger.error(f"Cannot create media directory {media_dir}: {e}")
        return 1

    store = get_store(media_dir, max_workers=config.default_workers)
    if args.no_scan:
        store.load()
    else:
        try:
            store.scan()
        except CatalogError as e:
            logger.error(f"Startup scan failed: {e}")
            return 1

    # Flush on normal exit; the collaborator also calls /api/shutdown on disconnect
    atexit.register(flush_on_exit, store)

    url = f'http://{DEFAULT_HOST}:{args.port}'
    if log_level >= LOG_MINIMAL:
        print()
        print("  IMAGE CATALOG")
        print(f"  Media directory: {media_dir}")
        print(f"     {len(store)} images, {store.stats()['duplicate_groups']} duplicate groups")
        print(f"  Server running at: {url}")
        print("  Press Ctrl+C to stop")
        print()

    # Suppress Flask banner for non-verbose modes
    if log_level < LOG_VERBOSE:
        suppress_flask_banner()

    app = create_app(store, log_level, bookmarks=config.bookmarks)

    try:
        app.run(
            host=DEFAULT_HOST,
            port=args.port,
            debug=False,
            threaded=True,
            use_reloader=False
        )
    except KeyboardInterrupt:
        if log_level >= LOG_MINIMAL:
            print("\n  Server stopped\n")
    return 0


if __name__ == '__main__':
    sys.exit(main())
