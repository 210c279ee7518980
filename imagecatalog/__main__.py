"""
Allow running the package with: python -m imagecatalog

By default, starts the HTTP service. Use 'cli' subcommand for a one-off scan.

Examples:
    python -m imagecatalog                        # Start HTTP service
    python -m imagecatalog serve                  # Start HTTP service (explicit)
    python -m imagecatalog cli /path/to/downloads # Scan and report
    python -m imagecatalog config --init          # Create example config file
"""

import sys


def main():
    if len(sys.argv) > 1 and sys.argv[1] == 'cli':
        # Remove 'cli' from argv so argparse in the CLI doesn't see it
        sys.argv.pop(1)
        from .cli import main as cli_main
        sys.exit(cli_main())
    elif len(sys.argv) > 1 and sys.argv[1] == 'serve':
        sys.argv.pop(1)
        from .app import main as serve_main
        sys.exit(serve_main())
    elif len(sys.argv) > 1 and sys.argv[1] == 'config':
        sys.argv.pop(1)
        from .user_config import get_user_config

        config = get_user_config()

        if '--init' in sys.argv or '-i' in sys.argv:
            # Create example config file
            if config.create_example_config():
                print("Created example configuration file at:")
                print(f"  {config.config_file_path}")
                print("\nEdit this file to customize Image Catalog settings.")
            else:
                print("Failed to create configuration file.")
                sys.exit(1)
        else:
            # Show current config path and values
            print(f"Configuration file: {config.config_file_path}")
            if config.config_file_path.exists():
                print("Status: found")
            else:
                print("Status: not found (using defaults)")
                print("\nRun 'python -m imagecatalog config --init' to create one.")

            print("\nCurrent settings:")
            print(f"  media_dir: {config.media_dir}")
            print(f"  default_workers: {config.default_workers}")
            print(f"  similarity_threshold: {config.similarity_threshold}")
            print(f"  similarity_sample_limit: {config.similarity_sample_limit:,}")
            print(f"  port: {config.port}")
            print(f"  bookmarks: {len(config.bookmarks)}")
    else:
        # Default to the HTTP service
        from .app import main as serve_main
        sys.exit(serve_main())


if __name__ == '__main__':
    main()
