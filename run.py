#!/usr/bin/env python3
"""
Azure DevOps Batch Importer — Entry Point.

Reads configuration from a .env file, loads the user stories (with their
tasks) from the JSON items file, and creates them as work items in an Azure
DevOps project. Each task is linked to the user story it belongs to.

Usage:
    python run.py                        # Import ITEMS_PATH from .env
    python run.py --items ./stories.json # Use another items file
    python run.py --debug                # Verbose output
    python run.py --version              # Show version
    python run.py --env /path            # Use alternate .env file
"""

import sys
import argparse
import logging

from ado_importer import ImportOrchestrator, __version__


def main():
    """Parse CLI arguments and run the import."""
    parser = argparse.ArgumentParser(
        description="ADO Batch Importer - Create user stories and tasks in Azure DevOps"
    )
    parser.add_argument("--env", "-e", default="./.env", help="Path to .env file")
    parser.add_argument("--items", "-i", help="Override items JSON path")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument("--version", "-v", action="store_true", help="Show version and exit")

    args = parser.parse_args()

    if args.version:
        print(f"ado-batch-importer {__version__}")
        sys.exit(0)

    # Initialize the orchestrator (loads .env and builds internal config)
    orchestrator = ImportOrchestrator(env_file=args.env)

    # Apply CLI overrides on top of .env values
    if args.items:
        orchestrator.items_path = args.items
    if args.debug:
        orchestrator.debug = True

    logging.basicConfig(
        level=logging.DEBUG if orchestrator.debug else logging.INFO,
        format="%(asctime)s %(name)s - %(levelname)s - %(message)s",
    )
    # Keep urllib3 connection chatter out of debug output
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    print(f"\n{'='*60}")
    print(f"ADO BATCH IMPORTER v{__version__}")
    print("="*60)
    print(f"Application: {orchestrator.app_name}")
    print(f"Organization: {orchestrator.organization}")
    print(f"Project: {orchestrator.project}")
    print(f"Items: {orchestrator.items_path}")

    if not orchestrator.validate_config():
        sys.exit(1)

    results = orchestrator.run()

    orchestrator.print_summary(results)

    if not results.get("success"):
        sys.exit(1)


if __name__ == "__main__":
    main()
