"""
Push slash-command definitions to Discord.

Usage: python deploy_commands.py [all|global|guild]
"""

import sys

from crimecat.deploy import run_deploy


def main() -> None:
    scope = sys.argv[1] if len(sys.argv) > 1 else "all"
    sys.exit(run_deploy(scope))


if __name__ == "__main__":
    main()
