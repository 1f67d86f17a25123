"""
Entry point for the WordPress events migration tool.
"""

import argparse
import sys

from events_migration.migration_tool import EventMigrationTool
from events_migration.utils.errors import ConfigError, FatalInputError

CONFIG_FILE = "config/migration_config.json"


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Convert WordPress event posts into Markdown files with YAML frontmatter."
    )
    parser.add_argument("--config", default=CONFIG_FILE, help="JSON config file (optional).")
    parser.add_argument("--export", dest="export_path", help="WordPress WXR export file.")
    parser.add_argument("--output", dest="output_dir", help="Directory receiving the event files.")
    parser.add_argument("--assets", dest="assets_dir", help="Directory holding the exported media.")
    parser.add_argument("--post-type", dest="post_type", help="Post type to migrate (default: event).")
    return parser.parse_args(argv)


def main(argv=None):
    """
    Main function to run the events migration tool.
    """
    args = parse_args(argv)
    try:
        tool = EventMigrationTool(
            {
                "export_path": args.export_path,
                "output_dir": args.output_dir,
                "assets_dir": args.assets_dir,
                "post_type": args.post_type,
            },
            config_file=args.config,
        )
    except ConfigError as e:
        print(f"[ERROR] {e}")
        return 1
    tool.log_message("Starting WordPress events migration.")

    try:
        summary = tool.run()
    except FatalInputError:
        return 1

    if summary.skipped:
        tool.log_message(f"{summary.skipped} events skipped; see {tool.report_dir} for details.", level="WARNING")
    tool.log_message("Migration process finished.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
